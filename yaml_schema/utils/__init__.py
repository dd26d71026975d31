"""Small helpers shared by the pointer, parser and validator modules."""

from .logging_utils import configure_split_stream_logging
from .source_location import (
    SourceLocation,
    format_source,
    json_pointer_escape,
    pointer_from_breadcrumbs,
    source_from_node,
)

__all__ = [
    "configure_split_stream_logging",
    "SourceLocation",
    "format_source",
    "json_pointer_escape",
    "pointer_from_breadcrumbs",
    "source_from_node",
]
