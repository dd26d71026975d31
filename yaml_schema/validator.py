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

"""Validate node trees against YAML schemas.

Validation is a single depth-first walk that stops at the first violation.
Errors are exception instances that travel back up the recursion as return
values; only :meth:`Validator.validate` raises them. Problems with the schema
itself are raised immediately from wherever they are found.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Type, Union

from .config import SchemaConfig, schema_config
from .exceptions import (
    InvalidPattern,
    InvalidSchema,
    InvalidString,
    MissingRequiredField,
    PathElement,
    UnexpectedProperty,
    UnexpectedTag,
    UnexpectedType,
    UnexpectedValue,
    ValidationError,
)
from .nodes import Document, Mapping, Node, Scalar, Sequence
from .scalar_scanner import ScalarType, tokenize
from .schema import check_schema
from .utils.source_location import pointer_from_breadcrumbs, source_from_node

logger = logging.getLogger(__name__)

Schema = Dict[str, Any]
AliasTable = Dict[str, Node]


class _Valid:
    """Success sentinel: a validation result carrying no error."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "Valid"

    def __bool__(self) -> bool:
        return False


Valid = _Valid()

ValidationResult = Union[_Valid, ValidationError]

STRING_TAGS = ("!str", "tag:yaml.org,2002:str")
SCALAR_TYPES = ("null", "boolean", "integer", "float", "time", "date", "symbol")


def _dump(text: str) -> str:
    # Double-quoted with escapes, e.g. "foo\n"
    return json.dumps(text)


class TagReader(Protocol):
    def read_tag(self, node: Node) -> Optional[str]:
        ...


class NodeInfo:
    """Default tag reader: a node's effective tag is its attached tag."""

    @staticmethod
    def read_tag(node: Node) -> Optional[str]:
        return node.tag


@dataclass
class _Walk:
    """State owned by a single top-level validation call."""

    config: SchemaConfig
    file_path: Optional[Any] = None
    aliases: AliasTable = field(default_factory=dict)

    def error(self, klass: Type[ValidationError], msg: str, node: Node, path: List[PathElement]) -> ValidationError:
        location = source_from_node(node, yaml_path=pointer_from_breadcrumbs(path[1:]), file_path=self.file_path)
        return klass(msg, path, location=location, separator=self.config.path_separator)


class Validator:
    """Schema validator for node trees.

    Args:
        node_info: Object with a ``read_tag(node)`` method used to derive the
            tag compared against ``schema["tag"]``. Lets callers map custom tag
            shorthands before comparison.
        config: Validation settings; defaults to the global configuration.
    """

    def __init__(self, node_info: TagReader = NodeInfo, config: Optional[SchemaConfig] = None):
        self._node_info = node_info
        self._config = config if config is not None else schema_config

    def validate(self, schema: Schema, node: Node) -> bool:
        """Validate *node* against *schema*.

        Returns:
            True when the node conforms

        Raises:
            ValidationError: The first violation found
            InvalidSchema: If the schema cannot be applied
        """
        result = self._run(schema, node)
        if result is not Valid:
            raise result
        return True

    def invalid(self, schema: Schema, node: Node) -> Union[bool, ValidationError]:
        """Non-raising variant of :meth:`validate`.

        Returns False when *node* conforms, otherwise the error value.
        """
        result = self._run(schema, node)
        if result is Valid:
            return False
        return result

    def _run(self, schema: Schema, node: Node) -> ValidationResult:
        if self._config.check_schema:
            check_schema(schema)

        walk = _Walk(self._config)
        if isinstance(node, Document):
            walk.file_path = node.file_path
            node = node.root

        logger.debug(f"Validating {node.kind} against schema type {schema.get('type')!r}")
        return self._visit(schema.get("type"), schema, node, Valid, walk, [self._config.root_name])

    def _visit(
        self,
        type_: Any,
        schema: Schema,
        node: Node,
        valid: ValidationResult,
        walk: _Walk,
        path: List[PathElement],
    ) -> ValidationResult:
        if valid is not Valid:
            return valid

        if node.anchor:
            if node.is_alias:
                node = walk.aliases[node.anchor]
            else:
                logger.debug(f"Binding anchor {node.anchor!r} at {pointer_from_breadcrumbs(path[1:]) or '/'}")
                walk.aliases[node.anchor] = node

        if isinstance(type_, list):
            if not type_:
                raise InvalidSchema("type list must not be empty")
            result = valid
            for alternative in type_:
                result = self._visit(alternative, schema, node, valid, walk, path)
                if result is Valid:
                    break
            return result

        error = self._check_tag(type_, schema, node, walk, path)
        if error is not None:
            return error

        if type_ == "object":
            return self._visit_object(schema, node, walk, path)
        if type_ == "array":
            return self._visit_array(schema, node, walk, path)
        if type_ == "string":
            return self._visit_string(schema, node, walk, path)
        if type_ in SCALAR_TYPES:
            return self._visit_scalar(type_, schema, node, walk, path)

        raise InvalidSchema(f"unknown type {type_!r}")

    def _check_tag(
        self, type_: str, schema: Schema, node: Node, walk: _Walk, path: List[PathElement]
    ) -> Optional[ValidationError]:
        tag = self._node_info.read_tag(node)
        expected = schema.get("tag") if type_ == "object" else None
        if tag == expected:
            return None

        if expected is None:
            return walk.error(UnexpectedTag, f"expected no tag, but got {_dump(tag)}", node, path)
        if tag is None:
            return walk.error(UnexpectedTag, f"expected tag {_dump(expected)}, but none specified", node, path)
        return walk.error(UnexpectedTag, f"expected tag {_dump(expected)}, but got {_dump(tag)}", node, path)

    def _visit_object(self, schema: Schema, node: Node, walk: _Walk, path: List[PathElement]) -> ValidationResult:
        if not isinstance(node, Mapping):
            return walk.error(UnexpectedType, f"expected Mapping, got {_dump(node.kind)}", node, path)

        properties = schema.get("properties")
        if properties is None and schema.get("items") is None:
            raise InvalidSchema("objects must specify items or properties")

        key_schema = {"type": "string", **schema.get("propertyNames", {})}
        additional = schema.get("additionalProperties")
        if not isinstance(additional, (dict, bool, type(None))):
            raise InvalidSchema(f"additionalProperties must be a schema or boolean, got {additional!r}")
        seen = set()
        valid: ValidationResult = Valid

        for key, value in node.children:
            valid = self._visit("string", key_schema, key, valid, walk, path)
            if valid is not Valid:
                return valid

            name = self._key_text(key, walk.aliases)
            # A property is consumed by its first occurrence; repeats are unknown.
            first = name not in seen
            seen.add(name)
            if properties is None:
                sub_schema = schema["items"]
            elif first and name in properties:
                sub_schema = properties[name]
            elif additional is True:
                self._bind_anchors(value, walk)
                continue
            elif isinstance(additional, dict):
                sub_schema = additional
            else:
                return walk.error(UnexpectedProperty, f"unknown property {_dump(name)}", key, path)

            valid = self._visit(sub_schema.get("type"), sub_schema, value, valid, walk, path + [name])
            if valid is not Valid:
                return valid

        missing = [name for name in schema.get("required", ()) if name not in seen]
        if missing:
            return walk.error(
                MissingRequiredField,
                f"missing required field {_dump(missing[0])} (missing: {', '.join(missing)})",
                node,
                path,
            )
        return valid

    @classmethod
    def _bind_anchors(cls, node: Node, walk: _Walk) -> None:
        """Record anchors of a subtree that is accepted without validation."""
        if node.is_alias:
            return
        if node.anchor:
            walk.aliases[node.anchor] = node
        if isinstance(node, Mapping):
            for key, value in node.children:
                cls._bind_anchors(key, walk)
                cls._bind_anchors(value, walk)
        elif isinstance(node, Sequence):
            for item in node.children:
                cls._bind_anchors(item, walk)

    @staticmethod
    def _key_text(key: Node, aliases: AliasTable) -> str:
        if key.is_alias:
            key = aliases[key.anchor]
        return key.value

    def _visit_array(self, schema: Schema, node: Node, walk: _Walk, path: List[PathElement]) -> ValidationResult:
        if not isinstance(node, Sequence):
            return walk.error(UnexpectedType, f"expected Sequence, got {_dump(node.kind)}", node, path)

        count = len(node.children)
        max_items = schema.get("maxItems")
        if max_items is not None and count > max_items:
            return walk.error(UnexpectedValue, f"expected maximum {max_items} items, but found {count}", node, path)
        min_items = schema.get("minItems")
        if min_items is not None and count < min_items:
            return walk.error(UnexpectedValue, f"expected minimum {min_items} items, but found {count}", node, path)

        valid: ValidationResult = Valid
        if schema.get("items") is not None:
            sub_schema = schema["items"]
            for i, item in enumerate(node.children):
                valid = self._visit(sub_schema.get("type"), sub_schema, item, valid, walk, path + [i])
        elif schema.get("prefixItems") is not None:
            prefix = schema["prefixItems"]
            for i, (item, sub_schema) in enumerate(zip(node.children, prefix)):
                valid = self._visit(sub_schema.get("type"), sub_schema, item, valid, walk, path + [i])
            if valid is Valid:
                # Elements past the declared prefix are not constrained.
                for item in node.children[len(prefix):]:
                    self._bind_anchors(item, walk)
        else:
            raise InvalidSchema("arrays must specify items or prefixItems")
        return valid

    def _visit_string(self, schema: Schema, node: Node, walk: _Walk, path: List[PathElement]) -> ValidationResult:
        if not isinstance(node, Scalar):
            return walk.error(UnexpectedType, f"expected Scalar, got {_dump(node.kind)}", node, path)

        if not (node.quoted or node.tag in STRING_TAGS):
            found = tokenize(node.value)
            if found is not ScalarType.STRING:
                return walk.error(UnexpectedValue, f"expected string, got {found.value}", node, path)

        length = len(node.value.encode("utf-8"))
        max_length = schema.get("maxLength")
        if max_length is not None and length > max_length:
            return walk.error(InvalidString, f"expected maximum length {max_length}, but found {length}", node, path)
        min_length = schema.get("minLength")
        if min_length is not None and length < min_length:
            return walk.error(InvalidString, f"expected minimum length {min_length}, but found {length}", node, path)

        return self._check_pattern(schema, node, walk, path)

    def _visit_scalar(
        self, type_: str, schema: Schema, node: Node, walk: _Walk, path: List[PathElement]
    ) -> ValidationResult:
        if not isinstance(node, Scalar):
            return walk.error(UnexpectedType, f"expected Scalar, got {_dump(node.kind)}", node, path)

        if node.quoted:
            return walk.error(UnexpectedValue, f"expected {type_}, got string", node, path)

        if type_ == "null" and node.value != "":
            return walk.error(UnexpectedValue, f"expected empty string, got {_dump(node.value)}", node, path)
        if type_ == "boolean" and node.value not in ("true", "false"):
            return walk.error(UnexpectedValue, "expected 'true' or 'false' for boolean", node, path)

        found = tokenize(node.value)
        if found != type_:
            return walk.error(UnexpectedValue, f"expected {type_}, got {found.value}", node, path)

        return self._check_pattern(schema, node, walk, path)

    @staticmethod
    def _check_pattern(schema: Schema, node: Scalar, walk: _Walk, path: List[PathElement]) -> ValidationResult:
        pattern = schema.get("pattern")
        if pattern is None:
            return Valid
        if not isinstance(pattern, re.Pattern):
            pattern = re.compile(pattern)
        if pattern.fullmatch(node.value) is None:
            message = f"expected {_dump(node.value)} to match {_dump(pattern.pattern)}"
            return walk.error(InvalidPattern, message, node, path)
        return Valid


# Default validator instance
validator = Validator()


def validate(schema: Schema, node: Node) -> bool:
    """Validate *node* against *schema* with the default validator."""
    return validator.validate(schema, node)


def invalid(schema: Schema, node: Node) -> Union[bool, ValidationError]:
    """Return False if *node* conforms to *schema*, else the error value."""
    return validator.invalid(schema, node)
