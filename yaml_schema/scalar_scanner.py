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

"""Implicit typing of plain (unquoted) YAML scalars.

The rules follow the YAML 1.1 type repository (http://yaml.org/type/) as
applied by common Ruby/Python loaders, so that a scalar is classified the way
the document author's tooling would load it. Checks run in a fixed order and
the first match wins.
"""

from __future__ import annotations

import re
from datetime import date
from enum import Enum


class ScalarType(str, Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    TIME = "time"
    DATE = "date"
    SYMBOL = "symbol"
    SEXAGESIMAL = "sexagesimal"
    STRING = "string"

    def __str__(self) -> str:
        return self.value


# Text that cannot be a number, timestamp or symbol: hash keys, words, etc.
_WORD_RE = re.compile(r"^[^\d.:-]?(?:[^\W\d]|[_\s!@#$%^&*(){}<>|/\\~;=])+", re.UNICODE)
_NOT_RESERVED_INITIAL_RE = re.compile(r"^[^ytonf~]", re.IGNORECASE)
_NULL_RE = re.compile(r"^(?:~|null)$", re.IGNORECASE)
_TRUE_RE = re.compile(r"^(?:yes|true|on)$", re.IGNORECASE)
_FALSE_RE = re.compile(r"^(?:no|false|off)$", re.IGNORECASE)

# http://yaml.org/type/timestamp.html
_TIME_RE = re.compile(
    r"^-?\d{4}-\d{1,2}-\d{1,2}(?:[Tt]|\s+)\d{1,2}:\d\d:\d\d(?:\.\d*)?"
    r"(?:\s*(?:Z|[-+]\d{1,2}:?(?:\d\d)?))?$"
)
_DATE_RE = re.compile(r"^(\d{4})-(1[012]|0\d|\d)-([12]\d|3[01]|0\d|\d)$")

_POSITIVE_INF_RE = re.compile(r"^\+?\.inf$", re.IGNORECASE)
_NEGATIVE_INF_RE = re.compile(r"^-\.inf$", re.IGNORECASE)
_NAN_RE = re.compile(r"^\.nan$", re.IGNORECASE)
_SYMBOL_RE = re.compile(r"^:.", re.DOTALL)

_SEXAGESIMAL_INT_RE = re.compile(r"^[-+]?[0-9][0-9_]*(?::[0-5]?[0-9]){1,2}$")
_SEXAGESIMAL_FLOAT_RE = re.compile(r"^[-+]?[0-9][0-9_]*(?::[0-5]?[0-9]){1,2}\.[0-9_]*$")

# http://yaml.org/type/float.html (base 60 and the special values are above)
_FLOAT_RE = re.compile(r"^[-+]?(?:[0-9][0-9_,]*)?\.[0-9]*(?:[eE][-+][0-9]+)?$")
_SIGN_DOT_RE = re.compile(r"^[-+]?\.$")

# http://yaml.org/type/int.html, requiring at least one digit
_INTEGER_RE = re.compile(
    r"""^(?:[-+]?0b_*[0-1][0-1_]*              # base 2
          |[-+]?0_*[0-7][0-7_]*               # base 8
          |[-+]?(?:0|[1-9][0-9_]*)            # base 10
          |[-+]?0x_*[0-9a-fA-F][0-9a-fA-F_]*  # base 16
        )$""",
    re.VERBOSE,
)

_MAX_WORD_LENGTH = 5


def _looks_like_word(text: str) -> bool:
    return bool(_WORD_RE.match(text)) or "\n" in text


def _is_calendar_date(match: "re.Match[str]") -> bool:
    year, month, day = (int(g) for g in match.groups())
    try:
        date(year, month, day)
    except ValueError:
        return False
    return True


def tokenize(text: str) -> ScalarType:
    """Classify the raw text of a plain scalar.

    >>> tokenize("yes")
    <ScalarType.BOOLEAN: 'boolean'>
    >>> str(tokenize("2025-11-19"))
    'date'
    """
    if text == "":
        return ScalarType.NULL

    if _looks_like_word(text):
        # No reserved word is longer than five characters.
        if len(text) > _MAX_WORD_LENGTH:
            return ScalarType.STRING
        if _NOT_RESERVED_INITIAL_RE.match(text):
            return ScalarType.STRING
        if _NULL_RE.match(text):
            return ScalarType.NULL
        if _TRUE_RE.match(text) or _FALSE_RE.match(text):
            return ScalarType.BOOLEAN
        return ScalarType.STRING

    if _TIME_RE.match(text):
        return ScalarType.TIME

    date_match = _DATE_RE.match(text)
    if date_match:
        return ScalarType.DATE if _is_calendar_date(date_match) else ScalarType.STRING

    if _POSITIVE_INF_RE.match(text) or _NEGATIVE_INF_RE.match(text) or _NAN_RE.match(text):
        return ScalarType.FLOAT

    if _SYMBOL_RE.match(text):
        return ScalarType.SYMBOL

    if _SEXAGESIMAL_INT_RE.match(text) or _SEXAGESIMAL_FLOAT_RE.match(text):
        return ScalarType.SEXAGESIMAL

    if _FLOAT_RE.match(text):
        if _SIGN_DOT_RE.match(text):
            return ScalarType.STRING
        return ScalarType.FLOAT

    if _INTEGER_RE.match(text):
        return ScalarType.INTEGER

    return ScalarType.STRING
