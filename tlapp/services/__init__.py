"""Services package initialization."""

from tlapp.services.dates import (
    DateRangeError,
    RangeValidation,
    format_for_edit,
    parse_date,
    safe_parse,
    validate_range,
)
from tlapp.services.export_png import PNGExporter, export_filename
from tlapp.services.layout import LayoutGeometry, TimelineLayout, compute_layout
from tlapp.services.renderer import SceneRenderer, render_timeline

__all__ = [
    "DateRangeError",
    "LayoutGeometry",
    "PNGExporter",
    "RangeValidation",
    "SceneRenderer",
    "TimelineLayout",
    "compute_layout",
    "export_filename",
    "format_for_edit",
    "parse_date",
    "render_timeline",
    "safe_parse",
    "validate_range",
]
