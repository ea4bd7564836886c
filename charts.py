from __future__ import annotations

from typing import List, Optional, Sequence

import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from heatmap import RenderInstructions, render_tooltip


def discrete_colorscale(palette: Sequence[str]) -> List[list]:
    """Stepped plotly colorscale giving each integer bucket 0..n-1 a flat colour."""
    n = len(palette)
    scale = []
    for i, color in enumerate(palette):
        scale.append([i / n, color])
        scale.append([(i + 1) / n, color])
    return scale


def _tooltip_html(cell, base_temperature: float) -> str:
    tip = render_tooltip(cell.observation, base_temperature)
    return (
        f"<span class='date'>{tip.date}</span><br>"
        f"<span class='temperature'>{tip.temperature}</span><br>"
        f"<span class='variance'>{tip.variance}</span>"
    )


def build_heatmap_figure(
    instructions: RenderInstructions, *, height: Optional[int] = None
) -> go.Figure:
    surface = instructions.surface
    if instructions.is_empty:
        return go.Figure()

    cells = pd.DataFrame(
        [
            {
                "year": c.data_year,
                "month": c.data_month,
                "bucket": c.bucket,
                "hover": _tooltip_html(c, instructions.base_temperature),
            }
            for c in instructions.cells
        ]
    )
    # months on rows, years on columns; a year seen twice for the same month keeps the last
    grouped = cells.groupby(["month", "year"])
    z = grouped["bucket"].last().unstack("year")
    hover = grouped["hover"].last().unstack("year")
    z = z.reindex(index=list(range(12)))
    hover = hover.reindex(index=z.index, columns=z.columns)

    n_colors = len(instructions.palette)
    colorscale = discrete_colorscale(instructions.palette)
    legend = instructions.legend
    block = legend.blocks[0].size

    fig = make_subplots(
        rows=2,
        cols=1,
        row_heights=[0.85, 0.15],
        vertical_spacing=0.12,
    )
    fig.add_trace(
        go.Heatmap(
            z=z.values,
            x=list(z.columns),
            y=list(z.index),
            text=hover.values,
            hovertemplate="%{text}<extra></extra>",
            colorscale=colorscale,
            zmin=-0.5,
            zmax=n_colors - 0.5,
            showscale=False,
            name="cells",
        ),
        row=1,
        col=1,
    )
    fig.add_trace(
        go.Heatmap(
            z=[[b.bucket for b in legend.blocks]],
            x=[b.x + block / 2 for b in legend.blocks],
            y=[0],
            colorscale=colorscale,
            zmin=-0.5,
            zmax=n_colors - 0.5,
            showscale=False,
            hoverinfo="skip",
            name="legend",
        ),
        row=2,
        col=1,
    )

    fig.update_xaxes(
        tickmode="array",
        tickvals=[t.value for t in instructions.x_axis.ticks],
        ticktext=[t.label for t in instructions.x_axis.ticks],
        ticks="outside",
        ticklen=instructions.x_axis.tick_size,
        title="Years",
        row=1,
        col=1,
    )
    fig.update_yaxes(
        tickmode="array",
        tickvals=[t.value for t in instructions.y_axis.ticks],
        ticktext=[t.label for t in instructions.y_axis.ticks],
        autorange="reversed",
        title="Months",
        row=1,
        col=1,
    )
    fig.update_xaxes(
        tickmode="array",
        tickvals=[t.position for t in legend.axis.ticks],
        ticktext=[t.label for t in legend.axis.ticks],
        ticks="outside",
        ticklen=legend.axis.tick_size,
        range=[0, len(legend.blocks) * block],
        domain=[0, len(legend.blocks) * block / surface.width],
        row=2,
        col=1,
    )
    fig.update_yaxes(visible=False, row=2, col=1)

    fig.update_layout(
        template="simple_white",
        width=surface.outer_width,
        height=height or surface.outer_height,
        margin=dict(l=surface.left, r=surface.right, t=surface.top, b=surface.bottom),
        title=dict(
            text=(
                f"{instructions.title.text}<br>"
                f"<sup>{instructions.description.text}</sup>"
            ),
            x=0.5,
            xanchor="center",
            font=dict(size=instructions.title.font_size),
        ),
    )
    return fig
