"""
SVG markup helpers shared by the chart builders.

Every chart is a flat list of element strings wrapped by `svg_document`,
which adds the XML header, accessibility metadata, background, watermark
tiling and attribution link. All text and attribute values go through
`escape`/`quoteattr`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence
from xml.sax.saxutils import escape, quoteattr

from app.config import settings

from .constants import (
    AXIS_COLOR,
    FONT_FAMILY,
    MUTED_TEXT_COLOR,
    PADDING_BOTTOM,
    PADDING_LEFT,
    PADDING_RIGHT,
    PADDING_TOP,
)
from .placement import PlotArea, place_label
from .scales import Scale

# Watermark grid
WATERMARK_COLUMNS = 3
WATERMARK_ROWS = 2
WATERMARK_OPACITY = 0.03


def fmt(value: float) -> str:
    """Fixed 2-decimal coordinate, keeps output byte-stable."""
    return f"{value:.2f}"


def element(tag: str, text: Optional[str] = None, children: Iterable[str] = (), **attrs) -> str:
    """
    Build one SVG element.

    Keyword arguments become attributes; a trailing underscore is dropped
    (`class_`) and other underscores become dashes (`font_size`).
    None-valued attributes are skipped. `text` is escaped, `children` are
    inserted verbatim after it.
    """
    parts = [tag]
    for key, value in attrs.items():
        if value is None:
            continue
        name = key.rstrip("_").replace("_", "-")
        parts.append(f"{name}={quoteattr(str(value))}")
    head = " ".join(parts)

    inner = escape(text) if text is not None else ""
    inner += "".join(children)
    if not inner:
        return f"<{head} />"
    return f"<{head}>{inner}</{tag}>"


def tooltip(text: str) -> str:
    return element("title", text)


def plot_area(width: int, height: int) -> PlotArea:
    return PlotArea(
        left=PADDING_LEFT,
        right=width - PADDING_RIGHT,
        top=PADDING_TOP,
        bottom=height - PADDING_BOTTOM,
        canvas_width=width,
        canvas_height=height,
    )


# === Decorations ===

def _watermark_text(url: str) -> str:
    text = url.split("://", 1)[-1]
    return text.rstrip("/")


def watermark(width: int, height: int, url: str) -> list[str]:
    """Faint rotated URL tiled over the canvas."""
    text = _watermark_text(url)
    step_x = width / (WATERMARK_COLUMNS + 1)
    step_y = height / (WATERMARK_ROWS + 1)

    marks = []
    for row in range(1, WATERMARK_ROWS + 1):
        for col in range(1, WATERMARK_COLUMNS + 1):
            x, y = fmt(col * step_x), fmt(row * step_y)
            marks.append(element(
                "text", text,
                x=x, y=y, text_anchor="middle", font_size=24, fill="#000000",
                opacity=WATERMARK_OPACITY, transform=f"rotate(-15 {x} {y})",
            ))
    return marks


def attribution(width: int, height: int, url: str) -> str:
    """'Created with <url>' link in the bottom-right corner."""
    label = element(
        "text", f"Created with {url}",
        x=width - 10, y=height - 5, text_anchor="end", font_size=10,
        fill=MUTED_TEXT_COLOR,
    )
    return element("a", children=[label], href=url, target="_blank")


def svg_document(
    width: int,
    height: int,
    title: str,
    description: str,
    body: Sequence[str],
    defs: Sequence[str] = (),
    attribution_url: Optional[str] = None,
) -> str:
    """Wrap chart elements into a complete SVG document string."""
    url = attribution_url or settings.attribution_url
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg width="{width}" height="{height}" viewBox="0 0 {width} {height}" '
        f'xmlns="http://www.w3.org/2000/svg" font-family={quoteattr(FONT_FAMILY)}>',
        element("title", title),
        element("desc", description),
    ]
    if defs:
        lines.append(element("defs", children=defs))
    lines.append(element("rect", x=0, y=0, width=width, height=height, fill="#ffffff"))
    lines.extend(watermark(width, height, url))
    lines.extend(body)
    lines.append(attribution(width, height, url))
    lines.append("</svg>")
    return "\n".join(lines) + "\n"


# === Axes ===

def axes(plot: PlotArea) -> list[str]:
    """X axis along the bottom, Y axis along the left edge."""
    return [
        element(
            "line", x1=plot.left, y1=plot.bottom, x2=plot.right, y2=plot.bottom,
            stroke=AXIS_COLOR, stroke_width=1.5,
        ),
        element(
            "line", x1=plot.left, y1=plot.bottom, x2=plot.left, y2=plot.top,
            stroke=AXIS_COLOR, stroke_width=1.5,
        ),
    ]


def x_tick(plot: PlotArea, x: float, label: str) -> list[str]:
    return [
        element(
            "line", x1=fmt(x), y1=plot.bottom, x2=fmt(x), y2=plot.bottom + 6,
            stroke=AXIS_COLOR, stroke_width=1,
        ),
        element(
            "text", label,
            x=fmt(x), y=plot.bottom + 22, text_anchor="middle", font_size=12,
            fill=AXIS_COLOR,
        ),
    ]


def y_tick(plot: PlotArea, y: float, label: str) -> list[str]:
    return [
        element(
            "line", x1=plot.left - 6, y1=fmt(y), x2=plot.left, y2=fmt(y),
            stroke=AXIS_COLOR, stroke_width=1,
        ),
        element(
            "text", label,
            x=plot.left - 10, y=fmt(y), text_anchor="end",
            alignment_baseline="middle", font_size=12, fill=AXIS_COLOR,
        ),
    ]


def count_ticks(plot: PlotArea, scale_y: Scale, max_count: int, tick_count: int) -> list[str]:
    """tick_count + 1 evenly spaced count labels from 0 to max_count."""
    marks = []
    for i in range(tick_count + 1):
        value = max_count / tick_count * i
        marks.extend(y_tick(plot, scale_y(value), str(int(value + 0.5))))
    return marks


def horizontal_grid(plot: PlotArea, y: float, color: str) -> str:
    return element(
        "line", x1=plot.left, y1=fmt(y), x2=plot.right, y2=fmt(y),
        stroke=color, stroke_width=1,
    )


def vertical_grid(plot: PlotArea, x: float, color: str) -> str:
    return element(
        "line", x1=fmt(x), y1=plot.top, x2=fmt(x), y2=plot.bottom,
        stroke=color, stroke_width=1,
    )


def axis_labels(plot: PlotArea, x_label: str, y_label: str) -> list[str]:
    cx = plot.canvas_width / 2
    cy = plot.canvas_height / 2
    y_x = plot.left - 50
    return [
        element(
            "text", x_label,
            x=fmt(cx), y=plot.canvas_height - 20, text_anchor="middle",
            font_size=14, fill=AXIS_COLOR,
        ),
        element(
            "text", y_label,
            x=y_x, y=fmt(cy), text_anchor="middle", font_size=14, fill=AXIS_COLOR,
            transform=f"rotate(-90 {y_x} {fmt(cy)})",
        ),
    ]


# === Highlights ===

@dataclass(frozen=True)
class Highlight:
    """One highlighted runner, already resolved to canvas coordinates."""

    slot: int  # position in the highlight list
    name: str
    tooltip: str
    color: str
    x: float
    y: float


def highlight_overlay(
    highlights: Sequence[Highlight],
    plot: PlotArea,
    marker_prefix: str,
    radius: float,
) -> tuple[list[str], list[str]]:
    """
    Arrow, label and dot for each highlight.

    Returns:
        (marker definitions for <defs>, elements to draw after the data marks)
    """
    markers: list[str] = []
    marks: list[str] = []
    for item in highlights:
        marker_id = f"{marker_prefix}-{item.slot}"
        markers.append(element(
            "marker",
            children=[element("polygon", points="0 0, 10 3, 0 6", fill=item.color)],
            id=marker_id, markerWidth=10, markerHeight=10, refX=9, refY=3,
            orient="auto",
        ))

        placement = place_label(item.x, item.y, plot, item.slot)
        marks.append(element(
            "line",
            x1=fmt(placement.arrow_start_x), y1=fmt(placement.arrow_start_y),
            x2=fmt(placement.arrow_end_x), y2=fmt(placement.arrow_end_y),
            stroke=item.color, stroke_width=2, marker_end=f"url(#{marker_id})",
        ))
        marks.append(element(
            "text", item.name,
            x=fmt(placement.text_x), y=fmt(placement.text_y),
            text_anchor=placement.text_anchor, font_size=16, font_weight="bold",
            fill=item.color,
        ))
        marks.append(element(
            "circle", children=[tooltip(item.tooltip)],
            cx=fmt(item.x), cy=fmt(item.y), r=radius, fill=item.color,
            stroke="#ffffff", stroke_width=2,
        ))
    return markers, marks
