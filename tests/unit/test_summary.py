import pytest
from samplestats.services.numeric import l2, mean, median, stddev
from samplestats.services.summary import find_statistic, statistic_name, summarize


def test_summarize_all():
    result = summarize([75.5, 100.5, 95.5, 265.5, -37.0])
    assert list(result) == ["mean", "stddev", "median", "l2"]
    assert result["mean"] == 100.0
    assert round(result["stddev"]) == 97.0
    assert result["median"] == 95.5
    assert round(result["l2"]) == 311.0

def test_summarize_empty():
    assert summarize([]) == {"mean": 0.0, "stddev": None, "median": None, "l2": 0.0}

def test_summarize_selected_statistics():
    result = summarize([-3.0, 4.0], [l2, median])
    assert result == {"l2": 5.0, "median": -3.0}

def test_find_statistic():
    assert find_statistic("mean") is mean
    assert find_statistic("stddev") is stddev
    assert find_statistic("median") is median
    assert find_statistic("l2") is l2

def test_find_statistic_unknown():
    with pytest.raises(KeyError):
        find_statistic("variance")

def test_statistic_name():
    assert statistic_name(l2) == "l2"
