from __future__ import annotations

import xml.etree.ElementTree as ET

from heatmap import Axis, RenderInstructions, render_tooltip
from utils.formatting import format_number

SVG_NS = "http://www.w3.org/2000/svg"

# Shows the #tooltip element next to the hovered cell and hides it again.
HOVER_SCRIPT = """
const tip = document.getElementById('tooltip');
document.querySelectorAll('rect.cell').forEach(cell => {
  cell.addEventListener('mouseover', ev => {
    const lines = cell.dataset.tooltip.split('\\n');
    tip.innerHTML = "<span class='date'>" + lines[0] + "</span><br />" +
      "<span class='temperature'>" + lines[1] + "</span><br />" +
      "<span class='variance'>" + lines[2] + "</span>";
    tip.setAttribute('data-year', cell.dataset.year);
    tip.style.left = (ev.pageX + 10) + 'px';
    tip.style.top = (ev.pageY - 40) + 'px';
    tip.style.visibility = 'visible';
  });
  cell.addEventListener('mouseout', () => {
    tip.removeAttribute('data-year');
    tip.style.visibility = 'hidden';
  });
});
"""

TOOLTIP_STYLE = (
    "position:absolute;visibility:hidden;pointer-events:none;"
    "background:rgba(0,0,0,0.8);color:#fff;padding:6px 10px;"
    "border-radius:4px;font:12px sans-serif;text-align:center;"
)


def _num(value: float) -> str:
    return format_number(value)


def _translate(x: float, y: float) -> str:
    return f"translate({_num(x)},{_num(y)})"


def _axis(parent: ET.Element, axis: Axis) -> ET.Element:
    group = ET.SubElement(parent, "g", {"transform": _translate(*axis.translate)})
    if axis.element_id:
        group.set("id", axis.element_id)
    group.set("class", f"axis axis-{axis.orient}")
    for tick in axis.ticks:
        if axis.orient == "bottom":
            t = ET.SubElement(group, "g", {"class": "tick", "transform": _translate(tick.position, 0)})
            ET.SubElement(t, "line", {"y2": str(axis.tick_size), "stroke": "currentColor"})
            label = ET.SubElement(
                t, "text", {"y": str(axis.tick_size + 3), "dy": "0.71em", "text-anchor": "middle"}
            )
        else:
            t = ET.SubElement(group, "g", {"class": "tick", "transform": _translate(0, tick.position)})
            ET.SubElement(t, "line", {"x2": str(-axis.tick_size), "stroke": "currentColor"})
            label = ET.SubElement(
                t, "text", {"x": str(-axis.tick_size - 3), "dy": "0.32em", "text-anchor": "end"}
            )
        label.text = tick.label
    return group


def build_svg_element(instructions: RenderInstructions) -> ET.Element:
    surface = instructions.surface
    root = ET.Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "width": str(surface.outer_width),
            "height": str(surface.outer_height),
            "class": "graph",
        },
    )
    if instructions.is_empty:
        return root

    chart = ET.SubElement(root, "g", {"transform": _translate(surface.left, surface.top)})
    for node in (instructions.title, instructions.description):
        text = ET.SubElement(
            chart,
            "text",
            {
                "id": node.element_id,
                "x": _num(node.x),
                "y": _num(node.y),
                "text-anchor": "middle",
                "style": f"font-size: {node.font_size}px",
            },
        )
        text.text = node.text

    _axis(chart, instructions.x_axis)
    _axis(chart, instructions.y_axis)

    cells = ET.SubElement(chart, "g", {"class": "map"})
    for cell in instructions.cells:
        tip = render_tooltip(cell.observation, instructions.base_temperature)
        ET.SubElement(
            cells,
            "rect",
            {
                "class": cell.css_class,
                "x": _num(cell.x),
                "y": _num(cell.y),
                "width": _num(cell.width),
                "height": _num(cell.height),
                "fill": cell.fill,
                "data-month": str(cell.data_month),
                "data-year": str(cell.data_year),
                "data-temp": _num(cell.data_temp),
                "data-tooltip": "\n".join((tip.date, tip.temperature, tip.variance)),
            },
        )

    legend = instructions.legend
    group = ET.SubElement(
        chart, "g", {"id": legend.element_id, "transform": _translate(*legend.translate)}
    )
    for block in legend.blocks:
        ET.SubElement(
            group,
            "rect",
            {
                "x": _num(block.x),
                "y": _num(block.y),
                "width": _num(block.size),
                "height": _num(block.size),
                "style": f"fill: {block.fill}",
            },
        )
    _axis(group, legend.axis)
    return root


def render_svg(instructions: RenderInstructions) -> str:
    return ET.tostring(build_svg_element(instructions), encoding="unicode")


def render_html(instructions: RenderInstructions) -> str:
    """SVG plus the hidden #tooltip element and its hover wiring."""
    tooltip = instructions.tooltip
    body = render_svg(instructions)
    if instructions.is_empty:
        return f"<main>{body}</main>"
    return (
        "<main>"
        f"{body}"
        f"<div id='{tooltip.element_id}' class='d3-tip' style='{TOOLTIP_STYLE}'></div>"
        f"<script>{HOVER_SCRIPT}</script>"
        "</main>"
    )
