import pytest
from utils.common_functions_raw import EventLogLoadError, merge_event_logs

# Test union by name with nulls for columns a file lacks
def test_merge_event_logs_column_union(spark):
    a = spark.createDataFrame(
        [("1", "Y"), ("2", "N")],
        "`cast` string, DNA_150 string"
    )
    b = spark.createDataFrame(
        [("yes", "3")],
        "EtOHchanged string, `cast` string"
    )
    out = merge_event_logs([a, b])
    assert out.columns == ["cast", "DNA_150", "EtOHchanged"]
    rows = out.collect()
    assert [r.cast for r in rows] == ["1", "2", "3"]
    assert [r.DNA_150 for r in rows] == ["Y", "N", None]
    assert [r.EtOHchanged for r in rows] == [None, None, "yes"]

# Test file order then row order is kept, duplicates are kept
def test_merge_event_logs_order_and_duplicates(spark):
    a = spark.createDataFrame([(str(i),) for i in range(20)], "`cast` string")
    b = spark.createDataFrame([("19",), ("0",)], "`cast` string")
    out = merge_event_logs([b, a])
    assert [r.cast for r in out.collect()] == ["19", "0"] + [str(i) for i in range(20)]

# Test an empty merge is rejected
def test_merge_event_logs_empty():
    with pytest.raises(EventLogLoadError):
        merge_event_logs([])
