from __future__ import annotations

# Source dataset (baseTemperature + monthlyVariance records).
DATASET_URL: str = (
    "https://raw.githubusercontent.com/freeCodeCamp/ProjectReferenceData/"
    "master/global-temperature.json"
)
FETCH_TIMEOUT: float = 30.0  # seconds; a single attempt, never retried

# Chart geometry in pixels. Inner width/height exclude the margins.
MARGIN: dict = dict(top=100, right=20, bottom=60, left=60)
OUTER_WIDTH: int = 1420
OUTER_HEIGHT: int = 630
WIDTH: int = OUTER_WIDTH - MARGIN["left"] - MARGIN["right"]
HEIGHT: int = OUTER_HEIGHT - MARGIN["top"] - MARGIN["bottom"]

TITLE: str = "Monthly Global Land-Surface Temperature"
TITLE_FONT_SIZE: int = 30
DESCRIPTION_FONT_SIZE: int = 20
X_TICK_SIZE: int = 10

# Colour buckets; the palette carries one extra colour.
NUM_OF_COLORS: int = 10
LEGEND_BLOCK_SIZE: int = 30

# Process-wide identification marker, not functionally significant.
STORAGE_MARKER: tuple = ("example_project", "D3: Heat Map")
