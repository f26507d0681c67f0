import os

import folium
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.colors import to_hex

from utils.config import MAP_EXTENTS, setup_logger

logger = setup_logger(__name__)

DEFAULT_COLOR = 'blue'


def station_colors(df, station_col='station'):
    """Map each station label to a hex color. Empty when the column is absent."""
    if station_col not in df.columns:
        return {}
    stations = sorted(str(s) for s in df[station_col].dropna().unique())
    cmap = plt.get_cmap('tab20')
    return {s: to_hex(cmap(i % cmap.N)) for i, s in enumerate(stations)}


def _point_colors(df, colors, station_col):
    if not colors:
        return [DEFAULT_COLOR] * len(df)
    return [colors.get(str(s), DEFAULT_COLOR) for s in df[station_col]]


def generate_event_map(df, out_path, lat_col='lat', lon_col='lon', label_col='sample_name',
                       station_col='station'):
    """Generate an interactive Folium map of tow positions. Returns the HTML path or None."""
    df = df.dropna(subset=[lat_col, lon_col])
    if df.empty:
        logger.warning(f"No valid lat/lon data for {out_path}. Skipping map.")
        return None

    # Center map on mean coordinates
    center_lat = df[lat_col].mean()
    center_lon = df[lon_col].mean()
    fmap = folium.Map(location=[center_lat, center_lon], zoom_start=7, tiles='CartoDB positron')

    colors = station_colors(df, station_col)
    for (_, row), color in zip(df.iterrows(), _point_colors(df, colors, station_col)):
        popup = f"Sample: {row.get(label_col, 'N/A')}"
        if colors:
            popup += f"<br>Station: {row[station_col]}"
        folium.CircleMarker(
            location=[row[lat_col], row[lon_col]],
            radius=3,
            color=color,
            fill=True,
            fill_color=color,
            fill_opacity=0.6,
            popup=popup
        ).add_to(fmap)

    os.makedirs(os.path.dirname(out_path) or '.', exist_ok=True)
    fmap.save(out_path)
    logger.info(f"Saved interactive map -> {out_path}")
    return out_path


def plot_event_positions(df, out_path, extent='shelf', lon_bounds=None, lat_bounds=None,
                         lat_col='lat', lon_col='lon', station_col='station'):
    """
    Static scatter of tow positions, one color per station.
    extent names a preset in MAP_EXTENTS (world, shelf, zoom); explicit
    lon_bounds/lat_bounds override it. Returns the PNG path or None.
    """
    if extent not in MAP_EXTENTS:
        raise ValueError(f"Unknown map extent '{extent}'; expected one of {sorted(MAP_EXTENTS)}")
    preset_lon, preset_lat = MAP_EXTENTS[extent]
    lon_bounds = lon_bounds or preset_lon
    lat_bounds = lat_bounds or preset_lat

    df = df.dropna(subset=[lat_col, lon_col])
    if df.empty:
        logger.warning(f"No valid lat/lon data for {out_path}. Skipping plot.")
        return None

    os.makedirs(os.path.dirname(out_path) or '.', exist_ok=True)
    fig, ax = plt.subplots(figsize=(6, 6))
    colors = station_colors(df, station_col)
    if colors:
        labels = df[station_col].astype(str)
        for station, color in colors.items():
            part = df[labels == station]
            ax.scatter(part[lon_col], part[lat_col], s=8, color=color, alpha=0.7, label=station)
        unlabeled = df[df[station_col].isna()]
        if not unlabeled.empty:
            ax.scatter(unlabeled[lon_col], unlabeled[lat_col], s=8, color=DEFAULT_COLOR, alpha=0.7)
        if len(colors) <= 20:
            ax.legend(title="Station", fontsize='small', loc='best')
    else:
        ax.scatter(df[lon_col], df[lat_col], s=8, color=DEFAULT_COLOR, alpha=0.7)
    ax.set_xlim(*lon_bounds)
    ax.set_ylim(*lat_bounds)
    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    ax.set_title(f"Bongo tow positions ({extent})")
    fig.tight_layout()
    fig.savefig(out_path)
    plt.close(fig)
    logger.info(f"Saved position plot -> {out_path}")
    return out_path
