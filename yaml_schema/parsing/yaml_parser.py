# Copyright 2025 TIER IV, inc.
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

"""YAML text to node tree builder with caching support."""

import yaml
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from ..config import schema_config
from ..exceptions import ParseError
from ..nodes import Alias, Document, Mapping, Node, Scalar, Sequence

logger = logging.getLogger(__name__)


class TreeBuilder:
    """Assemble nodes from a PyYAML event stream.

    Unlike ``yaml.compose`` this keeps alias nodes, explicit tags only (no
    implicit resolution) and the quoting style of scalars, which is what
    schema validation needs to tell ``42`` from ``'42'``.
    """

    def __init__(self, file_path: Optional[Path] = None):
        self.file_path = file_path
        self.documents: List[Document] = []
        self._stack: List[Node] = []
        self._pending_key: List[Optional[Node]] = []

    @staticmethod
    def _marks(event) -> Dict[str, int]:
        mark = getattr(event, "start_mark", None)
        if mark is None:
            return {}
        # PyYAML uses 0-based line/column
        return {"line": int(mark.line) + 1, "column": int(mark.column) + 1}

    def _add(self, node: Node) -> None:
        parent = self._stack[-1]
        if isinstance(parent, Mapping):
            key = self._pending_key[-1]
            if key is None:
                self._pending_key[-1] = node
            else:
                parent.children.append((key, node))
                self._pending_key[-1] = None
        else:
            parent.children.append(node)

    def _push(self, node: Node) -> None:
        self._add(node)
        self._stack.append(node)
        self._pending_key.append(None)

    def _pop(self) -> None:
        self._stack.pop()
        self._pending_key.pop()

    def feed(self, event: yaml.events.Event) -> None:
        if isinstance(event, yaml.DocumentStartEvent):
            doc = Document(file_path=self.file_path, **self._marks(event))
            self.documents.append(doc)
            self._stack.append(doc)
            self._pending_key.append(None)
        elif isinstance(event, yaml.DocumentEndEvent):
            self._pop()
        elif isinstance(event, yaml.MappingStartEvent):
            self._push(Mapping(tag=event.tag, anchor=event.anchor, **self._marks(event)))
        elif isinstance(event, yaml.SequenceStartEvent):
            self._push(Sequence(tag=event.tag, anchor=event.anchor, **self._marks(event)))
        elif isinstance(event, (yaml.MappingEndEvent, yaml.SequenceEndEvent)):
            self._pop()
        elif isinstance(event, yaml.ScalarEvent):
            self._add(
                Scalar(
                    event.value,
                    quoted=event.style is not None,
                    tag=event.tag,
                    anchor=event.anchor,
                    **self._marks(event),
                )
            )
        elif isinstance(event, yaml.AliasEvent):
            self._add(Alias(anchor=event.anchor, **self._marks(event)))

    def build(self, events: Iterable[yaml.events.Event]) -> List[Document]:
        for event in events:
            self.feed(event)
        return self.documents


class YamlParser:
    """YAML parser producing node trees, with optional caching."""

    def __init__(self, cache_enabled: bool = None):
        """Initialize YAML parser.

        Args:
            cache_enabled: Whether to enable caching. If None, uses global config.
        """
        self.cache_enabled = cache_enabled if cache_enabled is not None else schema_config.cache_enabled
        self._cache: Dict[Path, List[Document]] = {}

    def parse_all(self, content: str, file_path: Optional[Path] = None) -> List[Document]:
        """Parse every document in *content*.

        Raises:
            ParseError: If content cannot be parsed
        """
        try:
            return TreeBuilder(file_path).build(yaml.parse(content, Loader=yaml.SafeLoader))
        except yaml.YAMLError as exc:
            source = file_path if file_path is not None else "content"
            raise ParseError(f"Failed to parse YAML {source}: {exc}") from exc

    def parse(self, content: str) -> Document:
        """Parse the first document in *content*.

        An empty stream yields a document holding a single empty scalar.
        """
        documents = self.parse_all(content)
        if not documents:
            return Document(children=[Scalar("")])
        return documents[0]

    def parse_file(self, file_path: Union[str, Path]) -> List[Document]:
        """Parse every document in a YAML file.

        Raises:
            ParseError: If file cannot be read or parsed
        """
        path = Path(file_path)

        if not path.exists():
            raise ParseError(f"YAML file not found: {path}")

        if not path.is_file():
            raise ParseError(f"Path is not a file: {path}")

        if self.cache_enabled and path in self._cache:
            logger.debug(f"Loading node tree from cache: {path}")
            return self._cache[path]

        logger.debug(f"Parsing YAML file: {path}")
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ParseError(f"Failed to read YAML file {path}: {exc}") from exc

        documents = self.parse_all(content, file_path=path)
        if self.cache_enabled:
            self._cache[path] = documents
        return documents

    def clear_cache(self):
        """Clear the node tree cache."""
        self._cache.clear()
        logger.debug("Node tree cache cleared")


# Global parser instance
yaml_parser = YamlParser()


def parse(content: str) -> Document:
    """Parse YAML text into a ``Document`` using the global parser."""
    return yaml_parser.parse(content)
