from __future__ import annotations

import logging
from dataclasses import dataclass
from numbers import Real
from typing import Any, Mapping, Optional, Tuple

import pandas as pd
import requests

from constants import DATASET_URL, FETCH_TIMEOUT

logger = logging.getLogger(__name__)


class DatasetError(ValueError):
    """Raised when a temperature payload does not have the expected shape."""


@dataclass(frozen=True)
class Observation:
    year: int
    month: int  # 1-12
    variance: float


@dataclass(frozen=True)
class Dataset:
    base_temperature: float
    monthly_variance: Tuple[Observation, ...]

    def temperature(self, obs: Observation) -> float:
        return self.base_temperature + obs.variance

    def temperature_range(self) -> Tuple[float, float]:
        temps = [self.temperature(o) for o in self.monthly_variance]
        return min(temps), max(temps)

    def year_range(self) -> Tuple[int, int]:
        years = [o.year for o in self.monthly_variance]
        return min(years), max(years)


def _number(value: Any, field: str, where: str) -> float:
    # bool is a Real subclass but never a valid reading
    if isinstance(value, bool) or not isinstance(value, Real):
        raise DatasetError(f"{where}: '{field}' must be a number, got {value!r}")
    return float(value)


def _integer(value: Any, field: str, where: str) -> int:
    number = _number(value, field, where)
    if not number.is_integer():
        raise DatasetError(f"{where}: '{field}' must be an integer, got {value!r}")
    return int(number)


def parse_dataset(payload: Mapping[str, Any]) -> Dataset:
    if not isinstance(payload, Mapping):
        raise DatasetError("Dataset payload must be a JSON object.")
    for key in ("baseTemperature", "monthlyVariance"):
        if key not in payload:
            raise DatasetError(f"Dataset payload is missing '{key}'.")

    base = _number(payload["baseTemperature"], "baseTemperature", "dataset")
    records = payload["monthlyVariance"]
    if not isinstance(records, list):
        raise DatasetError("'monthlyVariance' must be a list of records.")
    if not records:
        raise DatasetError("'monthlyVariance' is empty.")

    observations = []
    for i, rec in enumerate(records):
        where = f"monthlyVariance[{i}]"
        if not isinstance(rec, Mapping):
            raise DatasetError(f"{where}: record must be an object, got {rec!r}")
        missing = [k for k in ("year", "month", "variance") if k not in rec]
        if missing:
            raise DatasetError(f"{where}: missing field(s) {', '.join(missing)}")
        month = _integer(rec["month"], "month", where)
        if not 1 <= month <= 12:
            raise DatasetError(f"{where}: 'month' must be within 1-12, got {month}")
        observations.append(
            Observation(
                year=_integer(rec["year"], "year", where),
                month=month,
                variance=_number(rec["variance"], "variance", where),
            )
        )
    return Dataset(base_temperature=base, monthly_variance=tuple(observations))


def fetch_dataset(
    url: str = DATASET_URL, session: Optional[requests.Session] = None
) -> Optional[Dataset]:
    """
    Download and parse the dataset once. Any failure (network, HTTP status,
    JSON decoding or payload shape) is swallowed and reported as None so the
    caller simply skips rendering.
    """
    http = session or requests
    try:
        resp = http.get(url, timeout=FETCH_TIMEOUT)
        resp.raise_for_status()
        dataset = parse_dataset(resp.json())
    except (requests.RequestException, ValueError) as e:
        # DatasetError and JSON decode errors are both ValueErrors
        logger.debug("Dataset load from %s failed: %s", url, e)
        return None
    logger.info(
        "Loaded %d monthly records from %s", len(dataset.monthly_variance), url
    )
    return dataset


def observations_frame(dataset: Dataset) -> pd.DataFrame:
    df = pd.DataFrame(
        [
            {"year": o.year, "month": o.month, "variance": o.variance}
            for o in dataset.monthly_variance
        ],
        columns=["year", "month", "variance"],
    )
    df["temperature"] = dataset.base_temperature + df["variance"]
    return df


def export_dataset_as_csv(dataset: Dataset) -> str:
    return observations_frame(dataset).to_csv(index=False)
