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

"""Node tree consumed by the pointer and the validator.

Nodes mirror the YAML representation graph before construction: scalars keep
their raw text, whether the source was quoted, explicit tags and anchors.
Shared subtrees appear once with an anchor and are referenced afterwards by
``Alias`` nodes. Nodes compare by identity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple


@dataclass(eq=False)
class Node:
    tag: Optional[str] = field(default=None, kw_only=True)
    anchor: Optional[str] = field(default=None, kw_only=True)
    line: Optional[int] = field(default=None, kw_only=True)  # 1-based
    column: Optional[int] = field(default=None, kw_only=True)  # 1-based

    is_alias = False

    @property
    def kind(self) -> str:
        return type(self).__name__


@dataclass(eq=False)
class Scalar(Node):
    value: str = ""
    quoted: bool = False


@dataclass(eq=False)
class Mapping(Node):
    children: List[Tuple[Node, Node]] = field(default_factory=list)

    def keys(self) -> List[Node]:
        return [key for key, _ in self.children]


@dataclass(eq=False)
class Sequence(Node):
    children: List[Node] = field(default_factory=list)


@dataclass(eq=False)
class Alias(Node):
    """Back-reference to a node previously bound to ``anchor``."""

    is_alias = True


@dataclass(eq=False)
class Document(Node):
    """Root wrapper holding exactly one child node."""

    children: List[Node] = field(default_factory=list)
    file_path: Optional[Path] = None

    @property
    def root(self) -> Node:
        return self.children[0]
