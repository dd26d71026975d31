"""Validate parsed YAML node trees against YAML schemas.

    >>> from yaml_schema import parse, validate
    >>> validate({"type": "integer"}, parse("42"))
    True
"""

from .exceptions import (
    FormatError,
    InvalidPattern,
    InvalidSchema,
    InvalidString,
    MissingRequiredField,
    ParseError,
    PointerError,
    PointerFormatError,
    PointerIndexError,
    SchemaError,
    UnexpectedProperty,
    UnexpectedTag,
    UnexpectedType,
    UnexpectedValue,
    ValidationError,
    YamlSchemaError,
)
from .nodes import Alias, Document, Mapping, Node, Scalar, Sequence
from .parsing import YamlParser, parse
from .pointer import Pointer
from .scalar_scanner import ScalarType, tokenize
from .schema import check_schema, load_schema
from .validator import NodeInfo, Valid, Validator, invalid, validate

__version__ = "0.1.0"

__all__ = [
    "Alias",
    "Document",
    "FormatError",
    "InvalidPattern",
    "InvalidSchema",
    "InvalidString",
    "Mapping",
    "MissingRequiredField",
    "Node",
    "NodeInfo",
    "ParseError",
    "Pointer",
    "PointerError",
    "PointerFormatError",
    "PointerIndexError",
    "Scalar",
    "ScalarType",
    "SchemaError",
    "Sequence",
    "UnexpectedProperty",
    "UnexpectedTag",
    "UnexpectedType",
    "UnexpectedValue",
    "Valid",
    "ValidationError",
    "Validator",
    "YamlParser",
    "YamlSchemaError",
    "check_schema",
    "invalid",
    "load_schema",
    "parse",
    "tokenize",
    "validate",
]
