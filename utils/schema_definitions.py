# schema_definitions.py
"""
PySpark schema definitions for the merged bongo tow table.
"""

from pyspark.sql.types import (
    StructType,
    StructField,
    StringType,
    DoubleType,
)

# ----------------------------------------------------------
# CANONICAL SCHEMA - merged event table after coercion
# ----------------------------------------------------------
BONGO_CANONICAL_SCHEMA = StructType([
    StructField("cruise", StringType(), True),              # Cruise code, e.g. EN655
    StructField("station", StringType(), True),             # Station label, e.g. L6
    StructField("cast", StringType(), False),               # Cast number (text to keep leading zeros)
    StructField("sample_name", StringType(), True),         # Sample identifier
    StructField("lat", DoubleType(), True),                 # Latitude (decimal degrees, WGS84)
    StructField("lon", DoubleType(), True),                 # Longitude (decimal degrees, WGS84)
    StructField("DateUTC", DoubleType(), True),             # Date encoded as a number
    StructField("Time_start_UTC", StringType(), True),      # Net in water, HH:MM:SS
    StructField("Time_end_UTC", StringType(), True),        # Net out of water, HH:MM:SS
    StructField("depth_bottom", DoubleType(), True),        # Bottom depth (m)
    StructField("depth_target", DoubleType(), True),        # Target tow depth (m)
    StructField("avg_angle", DoubleType(), True),           # Average wire angle (degrees)
    StructField("depth_TDR", DoubleType(), True),           # Time-depth recorder max depth (m)
    StructField("FlowMeterSerial_335", DoubleType(), True), # Flow meter serial, 335 net
    StructField("FlowStart_335", DoubleType(), True),       # Flow counter at start, 335 net
    StructField("FlowEnd_335", DoubleType(), True),         # Flow counter at end, 335 net
    StructField("TotFlow_335", DoubleType(), True),         # Counter difference, 335 net
    StructField("Vol_Filtered_m3_335", DoubleType(), True), # Volume filtered (m3), 335 net
    StructField("NOAA_335", StringType(), True),            # NOAA sample flag, 335 net
    StructField("DNA_335", StringType(), True),             # DNA sample flag, 335 net
    StructField("FlowMeterSerial_150", DoubleType(), True), # Flow meter serial, 150 net
    StructField("FlowStart_150", DoubleType(), True),       # Flow counter at start, 150 net
    StructField("FlowEnd_150", DoubleType(), True),         # Flow counter at end, 150 net
    StructField("TotFlow_150", DoubleType(), True),         # Counter difference, 150 net
    StructField("Vol_Filtered_m3_150", DoubleType(), True), # Volume filtered (m3), 150 net
    StructField("MorphID_150", StringType(), True),         # Morphological ID sample, 150 net
    StructField("DNA_150", StringType(), True),             # DNA sample flag, 150 net
    StructField("SizeFract_150", StringType(), True),       # Size fractionation sample, 150 net
    StructField("TaxaPick_150", StringType(), True),        # Taxa picking sample, 150 net
])

# Fields parsed as floating point by the coercer
NUMERIC_COLUMNS = tuple(
    f.name for f in BONGO_CANONICAL_SCHEMA.fields if isinstance(f.dataType, DoubleType)
)


# ----------------------------------------------------------
# VALIDATED EXCEPTIONS - outliers checked against the paper e-log
# ----------------------------------------------------------
VALIDATED_EXCEPTIONS_SCHEMA = StructType([
    StructField("cruise", StringType(), False),
    StructField("station", StringType(), False),
    StructField("note", StringType(), True),
])


# ----------------------------------------------------------
# SCHEMA MAP - stage-based schema lookup
# ----------------------------------------------------------
SCHEMA_MAP = {
    "canonical": BONGO_CANONICAL_SCHEMA,
    "validated_exceptions": VALIDATED_EXCEPTIONS_SCHEMA,
}
