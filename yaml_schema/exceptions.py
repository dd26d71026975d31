# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Custom exceptions for yaml_schema."""

from typing import List, Optional, Union

from .utils.source_location import SourceLocation, format_source

PathElement = Union[str, int]


class YamlSchemaError(Exception):
    """Base exception for yaml_schema related errors."""
    pass


class ParseError(YamlSchemaError):
    """Exception raised when YAML text cannot be turned into a node tree."""
    pass


class ValidationError(YamlSchemaError):
    """A node does not conform to its schema.

    Instances double as validation result values: the validator returns them
    up the recursion and only raises one from ``Validator.validate``.
    """

    def __init__(
        self,
        message: str,
        path: Optional[List[PathElement]] = None,
        location: Optional[SourceLocation] = None,
        separator: str = " -> ",
    ):
        self.message = message
        self.path: List[PathElement] = list(path or [])
        self.location = location
        text = message
        if self.path:
            text += " path: " + separator.join(str(p) for p in self.path)
        text += format_source(location)
        super().__init__(text)

    @property
    def kind(self) -> str:
        return type(self).__name__


class UnexpectedType(ValidationError):
    """Node has the wrong structural kind (mapping, sequence, scalar)."""
    pass


class UnexpectedTag(ValidationError):
    """Node tag does not match the schema."""
    pass


class UnexpectedProperty(ValidationError):
    """Mapping has a key the schema does not declare."""
    pass


class UnexpectedValue(ValidationError):
    """Scalar content or collection size does not match the schema."""
    pass


class InvalidString(ValidationError):
    """String length constraint violated."""
    pass


class InvalidPattern(InvalidString):
    """Scalar text does not match the schema pattern."""
    pass


class MissingRequiredField(ValidationError):
    """Mapping lacks a property listed in ``required``."""
    pass


class SchemaError(YamlSchemaError):
    """Base exception for malformed schemas (caller bugs, never returned)."""
    pass


class InvalidSchema(SchemaError):
    """Exception raised when a schema cannot be used for validation."""
    pass


class PointerError(YamlSchemaError):
    """Base exception for pointer parsing and lookup."""
    pass


class PointerFormatError(PointerError, ValueError):
    """Pointer text is not a valid path expression."""
    pass


class PointerIndexError(PointerError, IndexError):
    """Pointer segment cannot be used to index the current node."""
    pass


FormatError = PointerFormatError
