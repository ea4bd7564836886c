import sys
from pathlib import Path

import pytest


# Ensure the project root (parent of this file's directory) is importable when running pytest from anywhere
THIS_DIR = Path(__file__).resolve().parent
ROOT_DIR = THIS_DIR.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from dataset import parse_dataset  # noqa: E402


def make_payload():
    records = []
    for year in (1949, 1950, 1951, 1960):
        for month in range(1, 13):
            # deterministic spread of variances around zero
            variance = round(((year * 7 + month * 13) % 41) / 10 - 2.0, 3)
            records.append({"year": year, "month": month, "variance": variance})
    records[18] = {"year": 1950, "month": 7, "variance": 0.642}
    return {"baseTemperature": 8.66, "monthlyVariance": records}


@pytest.fixture()
def payload():
    return make_payload()


@pytest.fixture()
def sample_dataset():
    return parse_dataset(make_payload())
