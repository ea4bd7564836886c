from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from constants import (
    DESCRIPTION_FONT_SIZE,
    LEGEND_BLOCK_SIZE,
    MARGIN,
    NUM_OF_COLORS,
    OUTER_HEIGHT,
    OUTER_WIDTH,
    TITLE,
    TITLE_FONT_SIZE,
    X_TICK_SIZE,
)
from dataset import Dataset, DatasetError, Observation
from scales import (
    BandScale,
    LinearScale,
    ThresholdScale,
    heat_palette,
    interior_breakpoints,
    threshold_breakpoints,
)
from utils.formatting import (
    format_celsius,
    format_date_header,
    format_number,
    format_signed_celsius,
    format_tick,
    format_year,
    month_name,
)

MONTH_INDICES = tuple(range(12))


@dataclass(frozen=True)
class Surface:
    """Drawing surface: outer size in pixels plus margins around the plot area."""

    outer_width: int = OUTER_WIDTH
    outer_height: int = OUTER_HEIGHT
    top: int = MARGIN["top"]
    right: int = MARGIN["right"]
    bottom: int = MARGIN["bottom"]
    left: int = MARGIN["left"]

    @property
    def width(self) -> int:
        return self.outer_width - self.left - self.right

    @property
    def height(self) -> int:
        return self.outer_height - self.top - self.bottom


DEFAULT_SURFACE = Surface()


@dataclass(frozen=True)
class TextNode:
    element_id: str
    text: str
    x: float
    y: float
    font_size: int


@dataclass(frozen=True)
class Tick:
    value: float
    label: str
    position: float


@dataclass(frozen=True)
class Axis:
    element_id: Optional[str]
    orient: str  # "bottom" | "left"
    ticks: Tuple[Tick, ...]
    translate: Tuple[float, float] = (0.0, 0.0)
    tick_size: int = 6


@dataclass(frozen=True)
class Cell:
    x: float
    y: float
    width: float
    height: float
    fill: str
    bucket: int
    data_month: int
    data_year: int
    data_temp: float
    observation: Observation
    css_class: str = "cell"


@dataclass(frozen=True)
class LegendBlock:
    x: float
    y: float
    size: float
    threshold: float
    fill: str
    bucket: int


@dataclass(frozen=True)
class Legend:
    element_id: str
    blocks: Tuple[LegendBlock, ...]
    axis: Axis
    translate: Tuple[float, float]


@dataclass(frozen=True)
class Tooltip:
    element_id: str = "tooltip"
    visible: bool = False
    data_year: Optional[int] = None
    date: str = ""
    temperature: str = ""
    variance: str = ""


@dataclass(frozen=True)
class RenderInstructions:
    surface: Surface
    base_temperature: Optional[float] = None
    title: Optional[TextNode] = None
    description: Optional[TextNode] = None
    x_axis: Optional[Axis] = None
    y_axis: Optional[Axis] = None
    cells: Tuple[Cell, ...] = ()
    palette: Tuple[str, ...] = ()
    legend: Optional[Legend] = None
    tooltip: Tooltip = field(default_factory=Tooltip)

    @property
    def is_empty(self) -> bool:
        return not self.cells and self.legend is None and self.x_axis is None


def render_tooltip(observation: Observation, base_temperature: float) -> Tooltip:
    return Tooltip(
        visible=True,
        data_year=observation.year,
        date=format_date_header(observation.year, observation.month),
        temperature=format_celsius(base_temperature + observation.variance),
        variance=format_signed_celsius(observation.variance),
    )


def hide_tooltip() -> Tooltip:
    return Tooltip()


def _build_legend(
    lo: float, hi: float, color_scale: ThresholdScale, surface: Surface
) -> Legend:
    size = LEGEND_BLOCK_SIZE
    legend_x = LinearScale((lo, hi), (0, NUM_OF_COLORS * size))
    # one block per bucket edge, max included
    edges = threshold_breakpoints(lo, hi, NUM_OF_COLORS) + [hi]
    blocks = tuple(
        LegendBlock(
            x=i * size,
            y=-size,
            size=size,
            threshold=edge,
            fill=color_scale(edge),
            bucket=color_scale.bucket(edge),
        )
        for i, edge in enumerate(edges)
    )
    # the first breakpoint coincides with the start of the scale
    ticks = tuple(
        Tick(value=v, label=format_tick(v), position=legend_x(v))
        for v in interior_breakpoints(lo, hi, NUM_OF_COLORS)
    )
    axis = Axis(element_id=None, orient="bottom", ticks=ticks, tick_size=NUM_OF_COLORS)
    return Legend(
        element_id="legend", blocks=blocks, axis=axis, translate=(0.0, float(surface.height))
    )


def build_heatmap(
    dataset: Optional[Dataset], surface: Surface = DEFAULT_SURFACE
) -> RenderInstructions:
    """
    Turn a loaded dataset into drawing instructions for `surface`.

    A missing dataset (failed load upstream) produces an empty instruction
    set rather than an error.
    """
    if dataset is None:
        return RenderInstructions(surface=surface)
    if not dataset.monthly_variance:
        raise DatasetError("Cannot build a heat map from an empty dataset.")

    base = dataset.base_temperature
    records = dataset.monthly_variance
    lo, hi = dataset.temperature_range()
    first_year, last_year = dataset.year_range()
    width, height = surface.width, surface.height

    title = TextNode(
        element_id="title",
        text=TITLE,
        x=width / 2,
        y=-surface.top / 2,
        font_size=TITLE_FONT_SIZE,
    )
    description = TextNode(
        element_id="description",
        text=f"{first_year} - {last_year}: base temperature {format_number(base)}",
        x=width / 2,
        y=35 - surface.top / 2,
        font_size=DESCRIPTION_FONT_SIZE,
    )

    x_scale = BandScale((o.year for o in records), (1, width))
    y_scale = BandScale(MONTH_INDICES, (0, height - surface.bottom))

    x_axis = Axis(
        element_id="x-axis",
        orient="bottom",
        ticks=tuple(
            Tick(value=year, label=format_year(year), position=x_scale.center(year))
            for year in x_scale.domain
            if year % 10 == 0
        ),
        translate=(0.0, float(height - surface.bottom)),
        tick_size=X_TICK_SIZE,
    )
    y_axis = Axis(
        element_id="y-axis",
        orient="left",
        ticks=tuple(
            Tick(value=m, label=month_name(m), position=y_scale.center(m))
            for m in y_scale.domain
        ),
    )

    palette = heat_palette(NUM_OF_COLORS)
    color_scale = ThresholdScale(threshold_breakpoints(lo, hi, NUM_OF_COLORS), palette)

    cells = []
    for obs in records:
        temp = base + obs.variance
        cells.append(
            Cell(
                x=x_scale(obs.year),
                y=y_scale(obs.month - 1),
                width=x_scale.bandwidth,
                height=y_scale.bandwidth,
                fill=color_scale(temp),
                bucket=color_scale.bucket(temp),
                data_month=obs.month - 1,
                data_year=obs.year,
                data_temp=temp,
                observation=obs,
            )
        )

    return RenderInstructions(
        surface=surface,
        base_temperature=base,
        title=title,
        description=description,
        x_axis=x_axis,
        y_axis=y_axis,
        cells=tuple(cells),
        palette=tuple(palette),
        legend=_build_legend(lo, hi, color_scale, surface),
        tooltip=hide_tooltip(),
    )
