import importlib
import warnings

import pytest
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY
from samplestats.api import stats as stats_api
from samplestats.config import LimitSettings, Settings
from samplestats.main import create_app

SAMPLE = [75.5, 100.5, 95.5, 265.5, -37.0]


@pytest.fixture
def client():
    settings = Settings(limits=LimitSettings(max_sample_size=8))
    with TestClient(create_app(settings)) as c:
        yield c

def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

def test_ready(client):
    r = client.get("/ready")
    assert r.status_code == 200
    assert r.json()["status"] == "ready"

def test_stats(client):
    r = client.post("/stats", json={"numbers": SAMPLE})
    assert r.status_code == 200
    data = r.json()
    assert data["count"] == 5
    assert data["mean"] == 100.0
    assert round(data["stddev"]) == 97
    assert data["median"] == 95.5
    assert round(data["l2"]) == 311

def test_stats_empty_sample(client):
    r = client.post("/stats", json={"numbers": []})
    assert r.status_code == 200
    assert r.json() == {"count": 0, "mean": 0.0, "stddev": None, "median": None, "l2": 0.0}

def test_single_statistic(client):
    r = client.post("/stats/median", json={"numbers": [0.0, 0.5, -1.0, 1.0]})
    assert r.status_code == 200
    assert r.json() == {"statistic": "median", "count": 4, "value": 0.0}

def test_single_statistic_undefined(client):
    r = client.post("/stats/stddev", json={"numbers": []})
    assert r.status_code == 200
    assert r.json()["value"] is None

def test_unknown_statistic(client):
    r = client.post("/stats/variance", json={"numbers": [1, 2]})
    assert r.status_code == 404

def test_bad_request(client):
    r = client.post("/stats", json={"numbers": ["x"]})
    assert r.status_code == 400

def test_extra_fields_rejected(client):
    r = client.post("/stats", json={"numbers": [1], "text": "hi"})
    assert r.status_code == 400

def test_non_finite_input_rejected(client):
    r = client.post(
        "/stats",
        content='{"numbers": [1.0, NaN]}',
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert "detail" in r.json()

def test_overflow_rejected(client):
    r = client.post("/stats/l2", json={"numbers": [1e200, 1e200]})
    assert r.status_code == 400

def test_sample_too_large(client):
    r = client.post("/stats", json={"numbers": list(range(9))})
    assert r.status_code == 413

def test_metrics(client):
    client.post("/stats", json={"numbers": []})
    r = client.get("/metrics")
    assert r.status_code == 200
    assert "samplestats_request_total" in r.text
    assert "samplestats_statistic_total" in r.text
    assert 'outcome="undefined"' in r.text

def statistic_count(statistic, outcome):
    value = REGISTRY.get_sample_value(
        "samplestats_statistic_total", {"statistic": statistic, "outcome": outcome}
    )
    return value or 0.0

def test_overflow_not_counted_as_defined(client):
    before = statistic_count("l2", "defined")
    r = client.post("/stats/l2", json={"numbers": [1e200, 1e200]})
    assert r.status_code == 400
    r = client.post("/stats", json={"numbers": [1e200, 1e200]})
    assert r.status_code == 400
    assert statistic_count("l2", "defined") == before

def test_defined_result_counted(client):
    before = statistic_count("l2", "defined")
    client.post("/stats/l2", json={"numbers": [-3.0, 4.0]})
    assert statistic_count("l2", "defined") == before + 1

def test_stats_module_imports_without_deprecation_warning():
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        importlib.reload(stats_api)
