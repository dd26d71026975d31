from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence, Union


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[Path] = None
    yaml_path: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def json_pointer_escape(token: str) -> str:
    # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
    return token.replace("~", "~0").replace("/", "~1")


def pointer_from_breadcrumbs(path: Sequence[Union[str, int]]) -> str:
    """Render breadcrumbs (without the root name) as a JSON-pointer-like path."""
    return "".join(f"/{json_pointer_escape(str(p))}" for p in path)


def source_from_node(
    node: Any,
    yaml_path: Optional[str] = None,
    file_path: Optional[Union[str, Path]] = None,
) -> SourceLocation:
    """Create a SourceLocation from a node's 1-based line/column marks."""
    return SourceLocation(
        file_path=Path(file_path) if file_path is not None else None,
        yaml_path=yaml_path,
        line=getattr(node, "line", None),
        column=getattr(node, "column", None),
    )


def format_source(loc: Optional[SourceLocation]) -> str:
    if not loc:
        return ""

    parts = []
    if loc.file_path is not None:
        if loc.line is not None and loc.column is not None:
            parts.append(f"source= {loc.file_path}:{loc.line}:{loc.column} ")
        elif loc.line is not None:
            parts.append(f"source= {loc.file_path}:{loc.line} ")
        else:
            parts.append(f"source= {loc.file_path} ")
    elif loc.line is not None and loc.column is not None:
        parts.append(f"source= {loc.line}:{loc.column} ")

    if not parts:
        return ""

    return " (" + " ".join(parts) + ")"
