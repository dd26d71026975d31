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

"""Slash-separated pointers into a node tree.

``/foo/0/bar`` walks mapping keys and sequence indices from the root. Inside a
segment ``^/`` is a literal slash and ``^^`` a literal caret; the JSON Pointer
escapes ``~1`` and ``~0`` are understood as well.
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence as SequenceType

from .exceptions import PointerFormatError, PointerIndexError
from .nodes import Document, Mapping, Node, Scalar, Sequence

_INDEX_RE = re.compile(r"^(?:0|[1-9][0-9]*)$")
_ESCAPE = "^"


def _unescape_json_pointer(segment: str) -> str:
    return segment.replace("~1", "/").replace("~0", "~")


class Pointer:
    """Compiled pointer expression."""

    def __init__(self, path: str):
        self.path = path
        self.segments = self.parse(path)

    def __repr__(self) -> str:
        return f"Pointer({self.path!r})"

    @staticmethod
    def parse(path: str) -> List[str]:
        """Split *path* into unescaped segments.

        Raises:
            PointerFormatError: If a non-empty path does not start with "/"
        """
        if path == "":
            return []
        if not path.startswith("/"):
            raise PointerFormatError(f"pointer must start with '/': {path!r}")

        segments: List[str] = []
        current: List[str] = []
        chars = path[1:]
        i = 0
        while i < len(chars):
            char = chars[i]
            if char == _ESCAPE and i + 1 < len(chars) and chars[i + 1] in ("/", _ESCAPE):
                current.append(chars[i + 1])
                i += 2
                continue
            if char == "/":
                segments.append(_unescape_json_pointer("".join(current)))
                current = []
            else:
                current.append(char)
            i += 1
        segments.append(_unescape_json_pointer("".join(current)))
        return segments

    @staticmethod
    def evaluate(segments: SequenceType[str], node: Optional[Node]) -> Optional[Node]:
        """Walk *node* along *segments*; ``None`` when a mapping key is missing.

        Raises:
            PointerIndexError: On a non-numeric or out-of-range sequence index
        """
        if isinstance(node, Document):
            node = node.root

        for segment in segments:
            if node is None:
                return None
            if isinstance(node, Sequence):
                if not _INDEX_RE.match(segment):
                    raise PointerIndexError(f"invalid sequence index {segment!r}")
                index = int(segment)
                if index >= len(node.children):
                    raise PointerIndexError(
                        f"index {index} out of range for sequence of length {len(node.children)}"
                    )
                node = node.children[index]
            elif isinstance(node, Mapping):
                node = next(
                    (
                        value
                        for key, value in node.children
                        if isinstance(key, Scalar) and key.value == segment
                    ),
                    None,
                )
            else:
                return None
        return node

    def eval(self, node: Optional[Node]) -> Optional[Node]:
        return self.evaluate(self.segments, node)

    def __getitem__(self, node: Node) -> Node:
        found = self.eval(node)
        if found is None:
            raise PointerIndexError(f"no node at {self.path!r}")
        return found

    @classmethod
    def lookup(cls, path: str, node: Node) -> Node:
        """Shorthand for ``Pointer(path)[node]``."""
        return cls(path)[node]
