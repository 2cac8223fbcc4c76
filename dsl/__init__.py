from .parser import LineCursor, coerce_threshold, extract_value, leading_number, parse_definition
from .serializer import format_number, serialize_definition

parse = parse_definition
serialize = serialize_definition

__all__ = [
    "LineCursor",
    "coerce_threshold",
    "extract_value",
    "format_number",
    "leading_number",
    "parse",
    "parse_definition",
    "serialize",
    "serialize_definition",
]
