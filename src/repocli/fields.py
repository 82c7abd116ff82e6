"""Table-driven JSON field mapping between ``gh`` and a target provider.

A mapping table is an ordered tuple of ``(github_path, target_path)`` pairs.
Paths are dotted (``user.login``) and may address array members with ``[]``
(``assignees[].login``). Mapping renames: the value moves from the source
path to the destination path and the source key disappears. Keys absent from
the table are carried through untouched, so mapping twice in the same
direction is a no-op the second time.

``normalize`` / ``canonical_json`` / ``compare`` give stable equality for
outputs that differ only in timestamp precision, boolean spelling or key order.
"""

from __future__ import annotations

import copy
import json
import re
from collections.abc import Iterable
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from .errors import MalformedInputError

FieldTable = tuple[tuple[str, str], ...]


class Direction(str, Enum):
    GITHUB_TO_TARGET = "github-to-target"
    TARGET_TO_GITHUB = "target-to-github"


DEFAULT_FIELD_MAP: FieldTable = (
    ("body", "description"),
    ("html_url", "web_url"),
    ("created_at", "created_at"),
    ("updated_at", "updated_at"),
    ("state", "state"),
    ("number", "iid"),
    ("title", "title"),
    ("user.login", "author.username"),
    ("assignees[].login", "assignees[].username"),
    ("labels[].name", "labels[].name"),
)

# gh CLI ``--json`` vocabulary <-> glab ``--output json`` vocabulary
ISSUE_FIELD_MAP: FieldTable = (
    ("number", "iid"),
    ("body", "description"),
    ("url", "web_url"),
    ("createdAt", "created_at"),
    ("updatedAt", "updated_at"),
    ("closedAt", "closed_at"),
    ("author.login", "author.username"),
    ("assignees[].login", "assignees[].username"),
)

REPO_FIELD_MAP: FieldTable = (
    ("nameWithOwner", "path_with_namespace"),
    ("url", "web_url"),
    ("sshUrl", "ssh_url_to_repo"),
    ("defaultBranchRef.name", "default_branch"),
    ("createdAt", "created_at"),
    ("pushedAt", "last_activity_at"),
    ("stargazerCount", "star_count"),
    ("forkCount", "forks_count"),
)

LABEL_FIELD_MAP: FieldTable = (
    ("createdAt", "created_at"),
    ("isDefault", "is_project_label"),
)

_TIMESTAMP = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}")


def _split(path: str) -> list[tuple[str, bool]]:
    """``a[].b.c`` -> [("a", True), ("b", False), ("c", False)]."""
    parts: list[tuple[str, bool]] = []
    for segment in path.split("."):
        if segment.endswith("[]"):
            parts.append((segment[:-2], True))
        else:
            parts.append((segment, False))
    return parts


_MISSING = object()


def _pop(node: Any, parts: list[tuple[str, bool]]) -> Any:
    """Remove and return the value at ``parts``; prune parents left empty."""
    if not isinstance(node, dict) or not parts:
        return _MISSING
    key, _ = parts[0]
    if key not in node:
        return _MISSING
    if len(parts) == 1:
        return node.pop(key)
    child = node[key]
    value = _pop(child, parts[1:])
    if value is not _MISSING and child == {}:
        del node[key]
    return value


def _put(node: dict[str, Any], parts: list[tuple[str, bool]], value: Any) -> None:
    key, _ = parts[0]
    if len(parts) == 1:
        node[key] = value
        return
    child = node.get(key)
    if not isinstance(child, dict):
        child = {}
        node[key] = child
    _put(child, parts[1:], value)


def _rename(node: Any, src: list[tuple[str, bool]], dst: list[tuple[str, bool]]) -> None:
    if not isinstance(node, dict):
        return
    # Walk the shared array prefix first, then rename inside each element.
    key, is_array = src[0]
    if is_array:
        if dst[0] != src[0] or key not in node:
            return
        items = node[key]
        if isinstance(items, list):
            for item in items:
                _rename(item, src[1:], dst[1:])
        return
    value = _pop(node, src)
    if value is not _MISSING:
        _put(node, dst, value)


class FieldMapper:
    def __init__(self, table: Iterable[tuple[str, str]] = DEFAULT_FIELD_MAP) -> None:
        self.table: FieldTable = tuple(table)
        for github_path, target_path in self.table:
            if github_path.count("[]") != target_path.count("[]"):
                raise ValueError(f"array shape mismatch: {github_path} <-> {target_path}")

    def _pairs(self, direction: Direction) -> list[tuple[list[tuple[str, bool]], list[tuple[str, bool]]]]:
        pairs = []
        for github_path, target_path in self.table:
            if github_path == target_path:
                continue
            src, dst = (
                (github_path, target_path)
                if direction is Direction.GITHUB_TO_TARGET
                else (target_path, github_path)
            )
            pairs.append((_split(src), _split(dst)))
        return pairs

    def map(self, data: Any, direction: Direction | str) -> Any:
        direction = Direction(direction)
        if not isinstance(data, (dict, list)):
            raise MalformedInputError(
                f"expected a JSON object or array, got {type(data).__name__}"
            )
        result = copy.deepcopy(data)
        pairs = self._pairs(direction)
        for obj in result if isinstance(result, list) else [result]:
            for src, dst in pairs:
                _rename(obj, src, dst)
        return result

    def map_text(self, text: str, direction: Direction | str) -> Any:
        return self.map(parse_json(text), direction)


def parse_json(text: str) -> Any:
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise MalformedInputError(f"invalid JSON input: {exc}") from exc
    if not isinstance(data, (dict, list)):
        raise MalformedInputError("invalid JSON input: expected an object or array")
    return data


_DEFAULT_MAPPER = FieldMapper()


def map_fields(data: Any, direction: Direction | str, table: FieldTable | None = None) -> Any:
    mapper = _DEFAULT_MAPPER if table is None else FieldMapper(table)
    return mapper.map(data, direction)


def map_json_text(text: str, direction: Direction | str, table: FieldTable | None = None) -> Any:
    return map_fields(parse_json(text), direction, table)


def _normalize_timestamp(value: str) -> str:
    if not _TIMESTAMP.match(value):
        return value
    raw = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return value
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def normalize(data: Any) -> Any:
    """Canonicalize timestamps and boolean strings recursively."""
    if isinstance(data, dict):
        return {k: normalize(v) for k, v in data.items()}
    if isinstance(data, list):
        return [normalize(v) for v in data]
    if isinstance(data, str):
        if data in ("true", "false"):
            return data == "true"
        return _normalize_timestamp(data)
    return data


def canonical_json(data: Any) -> str:
    return json.dumps(normalize(data), sort_keys=True, separators=(",", ":"))


class Comparison(Enum):
    IDENTICAL = 0
    EQUIVALENT = 1
    DIFFERENT = 2


def compare(
    left: Any,
    right: Any,
    direction: Direction | str | None = None,
    table: FieldTable | None = None,
) -> Comparison:
    """Semantic comparison of two payloads.

    ``direction`` maps ``left`` (github->target) or ``right`` (target->github)
    before comparing; ``None`` tries both.
    """
    mapper = _DEFAULT_MAPPER if table is None else FieldMapper(table)
    if canonical_json(left) == canonical_json(right):
        return Comparison.IDENTICAL
    candidates: list[tuple[Any, Any]] = []
    if direction in (None, Direction.GITHUB_TO_TARGET, Direction.GITHUB_TO_TARGET.value):
        candidates.append((mapper.map(left, Direction.GITHUB_TO_TARGET), right))
    if direction in (None, Direction.TARGET_TO_GITHUB, Direction.TARGET_TO_GITHUB.value):
        candidates.append((left, mapper.map(right, Direction.TARGET_TO_GITHUB)))
    for a, b in candidates:
        if canonical_json(a) == canonical_json(b):
            return Comparison.EQUIVALENT
    return Comparison.DIFFERENT


def select_fields(data: Any, fields: Iterable[str]) -> Any:
    """Keep only the requested top-level keys (``gh --json a,b`` semantics)."""
    wanted = [f for f in fields if f]
    if isinstance(data, list):
        return [select_fields(item, wanted) for item in data]
    if isinstance(data, dict):
        return {k: data.get(k) for k in wanted}
    return data


__all__ = [
    "Comparison",
    "DEFAULT_FIELD_MAP",
    "Direction",
    "FieldMapper",
    "ISSUE_FIELD_MAP",
    "LABEL_FIELD_MAP",
    "REPO_FIELD_MAP",
    "canonical_json",
    "compare",
    "map_fields",
    "map_json_text",
    "normalize",
    "parse_json",
    "select_fields",
]
