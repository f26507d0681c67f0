"""
Column name normalization map for the bongo event log datasheets.
Source names from the per-cruise sheets on the left, canonical names on the right.
The two net-size families (150 and 335 mesh) move from a numeric prefix to a suffix.
"""

COLUMN_MAPPING = {
    "TimeInWaterUTC": "Time_start_UTC",
    "TimeOutWaterUTC": "Time_end_UTC",
    "long": "lon",
    "bot_depth": "depth_bottom",
    "target_depth": "depth_target",
    "TDRdepth": "depth_TDR",
    # 335 net
    "335FlowMeterNum": "FlowMeterSerial_335",
    "335FlowStart": "FlowStart_335",
    "335FlowEnd": "FlowEnd_335",
    "335TotFlow": "TotFlow_335",
    "335Volume_filteredm3": "Vol_Filtered_m3_335",
    "335_NOAA": "NOAA_335",
    "335_DNA": "DNA_335",
    # 150 net
    "150FlowMeterNum": "FlowMeterSerial_150",
    "150FlowStart": "FlowStart_150",
    "150FlowEnd": "FlowEnd_150",
    "150TotFlow": "TotFlow_150",
    "150Volume_filteredm3": "Vol_Filtered_m3_150",
    "150_MorphID": "MorphID_150",
    "150_DNA": "DNA_150",
    "150_SizeFract": "SizeFract_150",
    "150_TaxaPicking": "TaxaPick_150",
}

# Read as text in every file; some sheets store these as bare integers
FORCED_STRING_COLUMNS = ("cast", "DateUTC", "TimeInWaterUTC")

TIME_OF_DAY_COLUMNS = ("Time_start_UTC", "Time_end_UTC")

EVENT_KEY_COLUMNS = ("cruise", "station", "cast", "sample_name")

IDENTIFIER_COLUMNS = (
    "cruise",
    "station",
    "cast",
    "sample_name",
    "FlowMeterSerial_335",
    "MorphID_150",
    "DNA_150",
    "SizeFract_150",
    "TaxaPick_150",
    "EtOHchanged",
)

SUMMARY_COLUMNS = (
    "DateUTC",
    "lat",
    "lon",
    "depth_bottom",
    "depth_target",
    "avg_angle",
    "depth_TDR",
    "FlowStart_335",
    "FlowEnd_335",
    "TotFlow_335",
    "Vol_Filtered_m3_335",
    "FlowStart_150",
    "FlowEnd_150",
    "TotFlow_150",
    "Vol_Filtered_m3_150",
)
