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

"""Schema loading and authoring checks."""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Union

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError as JsonSchemaValidationError

from .exceptions import InvalidSchema

logger = logging.getLogger(__name__)

TYPE_NAMES = ("object", "array", "string", "null", "boolean", "integer", "float", "time", "date", "symbol")

# Meta-schema for the keywords the validator understands. Unknown keywords
# are allowed so that schemas can carry annotations.
META_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$defs": {
        "typeName": {"enum": list(TYPE_NAMES)},
        "count": {"type": "integer", "minimum": 0},
        "subSchema": {"$ref": "#"},
    },
    "type": "object",
    "properties": {
        "type": {
            "oneOf": [
                {"$ref": "#/$defs/typeName"},
                {"type": "array", "items": {"$ref": "#/$defs/typeName"}, "minItems": 1},
            ]
        },
        "properties": {"type": "object", "additionalProperties": {"$ref": "#/$defs/subSchema"}},
        "items": {"$ref": "#/$defs/subSchema"},
        "prefixItems": {"type": "array", "items": {"$ref": "#/$defs/subSchema"}},
        "additionalProperties": {"anyOf": [{"type": "boolean"}, {"$ref": "#/$defs/subSchema"}]},
        "propertyNames": {"type": "object"},
        "required": {"type": "array", "items": {"type": "string"}, "uniqueItems": True},
        "tag": {"type": "string"},
        "pattern": {"type": "string"},
        "minLength": {"$ref": "#/$defs/count"},
        "maxLength": {"$ref": "#/$defs/count"},
        "minItems": {"$ref": "#/$defs/count"},
        "maxItems": {"$ref": "#/$defs/count"},
    },
    "required": ["type"],
}


def _is_string(checker, instance) -> bool:
    # Compiled regular expressions are accepted wherever a pattern string is.
    return isinstance(instance, (str, re.Pattern))


_type_checker = jsonschema.Draft202012Validator.TYPE_CHECKER.redefine("string", _is_string)
MetaSchemaValidator = jsonschema.validators.extend(
    jsonschema.Draft202012Validator, type_checker=_type_checker
)
_meta_validator = MetaSchemaValidator(META_SCHEMA)

# Schema cache to avoid reloading files
_SCHEMA_CACHE: Dict[Path, dict] = {}


def check_schema(schema: Any) -> None:
    """Check that *schema* is well formed.

    Raises:
        InvalidSchema: On the first authoring error found
    """
    try:
        _meta_validator.validate(schema)
    except JsonSchemaValidationError as e:
        path = "/" + "/".join(str(p) for p in e.absolute_path) if e.absolute_path else ""
        raise InvalidSchema(f"invalid schema at '{path}': {e.message}") from e


def load_schema(schema_path: Union[str, Path], check: bool = True) -> dict:
    """Load a schema from a JSON or YAML file.

    Args:
        schema_path: Path to a ``.json``, ``.yaml`` or ``.yml`` file
        check: Whether to run :func:`check_schema` on the loaded document

    Returns:
        Schema dictionary

    Raises:
        FileNotFoundError: If the schema file doesn't exist
        InvalidSchema: If the file cannot be decoded or fails the check
    """
    path = Path(schema_path)
    if path in _SCHEMA_CACHE:
        logger.debug(f"Loading schema from cache: {path}")
        return _SCHEMA_CACHE[path]

    if not path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix == ".json":
                schema = json.load(f)
            else:
                schema = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise InvalidSchema(f"Failed to decode schema file {path}: {e}") from e

    if check:
        check_schema(schema)

    _SCHEMA_CACHE[path] = schema
    return schema


def clear_cache() -> None:
    """Clear the schema cache. Useful for testing."""
    _SCHEMA_CACHE.clear()
