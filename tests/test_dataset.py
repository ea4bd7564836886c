import csv

import pytest
import requests

import dataset
from dataset import (
    DatasetError,
    Observation,
    export_dataset_as_csv,
    fetch_dataset,
    observations_frame,
    parse_dataset,
)


class FakeResponse:
    def __init__(self, payload=None, status=200, bad_json=False):
        self._payload = payload
        self.status_code = status
        self._bad_json = bad_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._bad_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response


def test_parse_dataset_builds_immutable_records(payload):
    ds = parse_dataset(payload)
    assert ds.base_temperature == 8.66
    assert len(ds.monthly_variance) == 48
    assert ds.monthly_variance[18] == Observation(year=1950, month=7, variance=0.642)
    assert ds.year_range() == (1949, 1960)
    with pytest.raises(Exception):
        ds.base_temperature = 1.0  # frozen


def test_temperature_range_scans_absolute_temperatures(payload):
    ds = parse_dataset(payload)
    temps = [8.66 + r["variance"] for r in payload["monthlyVariance"]]
    assert ds.temperature_range() == (min(temps), max(temps))


@pytest.mark.parametrize(
    "mutate, message",
    [
        (lambda p: p.pop("baseTemperature"), "baseTemperature"),
        (lambda p: p.pop("monthlyVariance"), "monthlyVariance"),
        (lambda p: p.update(monthlyVariance=[]), "empty"),
        (lambda p: p.update(monthlyVariance="nope"), "list"),
        (lambda p: p["monthlyVariance"][3].pop("variance"), r"monthlyVariance\[3\]"),
        (lambda p: p["monthlyVariance"][5].update(month=13), "1-12"),
        (lambda p: p["monthlyVariance"][0].update(year="1949"), "year"),
        (lambda p: p.update(baseTemperature=True), "baseTemperature"),
    ],
)
def test_parse_dataset_rejects_malformed_payloads(payload, mutate, message):
    mutate(payload)
    with pytest.raises(DatasetError, match=message):
        parse_dataset(payload)


def test_parse_dataset_rejects_non_object():
    with pytest.raises(DatasetError):
        parse_dataset([1, 2, 3])


def test_fetch_dataset_success(payload):
    session = FakeSession(FakeResponse(payload))
    ds = fetch_dataset("http://example.test/data.json", session=session)
    assert ds is not None
    assert len(ds.monthly_variance) == 48
    assert session.calls == [("http://example.test/data.json", dataset.FETCH_TIMEOUT)]


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(error=requests.ConnectionError("offline")),
        FakeSession(error=requests.Timeout("slow")),
        FakeSession(FakeResponse(status=404)),
        FakeSession(FakeResponse(bad_json=True)),
        FakeSession(FakeResponse({"baseTemperature": 8.66})),
    ],
)
def test_fetch_dataset_failure_is_silent(session):
    assert fetch_dataset("http://example.test/data.json", session=session) is None


def test_fetch_dataset_uses_requests_by_default(monkeypatch, payload):
    seen = {}

    def fake_get(url, timeout=None):
        seen["url"] = url
        return FakeResponse(payload)

    monkeypatch.setattr(dataset.requests, "get", fake_get)
    ds = fetch_dataset()
    assert ds is not None
    assert seen["url"] == dataset.DATASET_URL


def test_observations_frame_and_csv(sample_dataset):
    df = observations_frame(sample_dataset)
    assert list(df.columns) == ["year", "month", "variance", "temperature"]
    assert len(df) == 48
    row = df.iloc[18]
    assert row["temperature"] == 8.66 + 0.642

    rows = list(csv.DictReader(export_dataset_as_csv(sample_dataset).splitlines()))
    assert len(rows) == 48
    assert rows[18]["year"] == "1950"
    assert rows[18]["month"] == "7"


def test_fetch_failure_logs_nothing_above_debug(caplog):
    session = FakeSession(error=requests.ConnectionError("offline"))
    with caplog.at_level("DEBUG", logger="dataset"):
        assert fetch_dataset("http://example.test/data.json", session=session) is None
    assert caplog.records
    assert all(r.levelname == "DEBUG" for r in caplog.records)
