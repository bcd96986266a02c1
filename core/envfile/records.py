"""
Pixie Env File - Line Records
=============================
Tokenizes a flat ``KEY=value`` configuration resource into an ordered
sequence of line records and renders it back.

Only the assignment shape is understood. Comments, blank lines and
anything else are carried as opaque records and rendered byte-for-byte.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Iterable, Iterator, Optional, Union

NULL_SENTINEL = "null"

_LINE_PATTERN = re.compile(r"([^\r\n]*)(\r\n|\n|\r|$)")
_ASSIGNMENT_PATTERN = re.compile(
    r"^(?P<prefix>[ \t]*(?:export[ \t]+)?)"
    r"(?P<key>[A-Za-z_][A-Za-z0-9_.]*)="
    r"(?P<value>.*)$"
)


def canonical_key(key: str) -> str:
    if not isinstance(key, str) or not key.strip():
        raise ValueError("key must be a non-empty string.")
    return key.strip().upper()


# ══════════════════════════════════════════════════════════════
# LINE RECORDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class BlankLine:
    text: str
    newline: str = "\n"

    def render(self) -> str:
        return self.text + self.newline


@dataclass(frozen=True)
class CommentLine:
    text: str
    newline: str = "\n"

    def render(self) -> str:
        return self.text + self.newline


@dataclass(frozen=True)
class RawLine:
    """A line that is neither blank, comment nor assignment."""

    text: str
    newline: str = "\n"

    def render(self) -> str:
        return self.text + self.newline


@dataclass(frozen=True)
class AssignmentLine:
    """
    ``<prefix><key>=<value><newline>``

    prefix holds leading whitespace and an optional ``export`` token.
    key keeps the casing found in the resource; lookups go through
    canonical_key.
    """

    prefix: str
    key: str
    value: str
    newline: str = "\n"

    def __post_init__(self):
        if "\n" in self.value or "\r" in self.value:
            raise ValueError("value must not contain line breaks.")

    @property
    def canonical_key(self) -> str:
        return canonical_key(self.key)

    def with_value(self, value: str) -> "AssignmentLine":
        return replace(self, value=value)

    def render(self) -> str:
        return f"{self.prefix}{self.key}={self.value}{self.newline}"


LineRecord = Union[BlankLine, CommentLine, RawLine, AssignmentLine]


def _split_lines(text: str) -> Iterator[tuple[str, str]]:
    for match in _LINE_PATTERN.finditer(text):
        body, newline = match.group(1), match.group(2)
        if not body and not newline:
            continue
        yield body, newline


def parse_line(body: str, newline: str = "\n") -> LineRecord:
    if not body.strip():
        return BlankLine(text=body, newline=newline)
    if body.lstrip().startswith("#"):
        return CommentLine(text=body, newline=newline)
    match = _ASSIGNMENT_PATTERN.match(body)
    if match is None:
        return RawLine(text=body, newline=newline)
    return AssignmentLine(
        prefix=match.group("prefix"),
        key=match.group("key"),
        value=match.group("value"),
        newline=newline,
    )


# ══════════════════════════════════════════════════════════════
# DOCUMENT
# ══════════════════════════════════════════════════════════════

class EnvDocument:
    """
    Ordered, mutable view over a configuration resource.

    Lookups are case-insensitive. When a key occurs more than once the
    first occurrence wins for reads; set() collapses the duplicates into
    the first occurrence.
    """

    def __init__(self, records: Iterable[LineRecord] = ()):
        self._records: list[LineRecord] = list(records)

    @classmethod
    def parse(cls, text: str) -> "EnvDocument":
        if not isinstance(text, str):
            raise ValueError("text must be a string.")
        return cls(parse_line(body, newline) for body, newline in _split_lines(text))

    @property
    def records(self) -> tuple[LineRecord, ...]:
        return tuple(self._records)

    def _assignment_indexes(self, key: str) -> list[int]:
        wanted = canonical_key(key)
        return [
            index
            for index, record in enumerate(self._records)
            if isinstance(record, AssignmentLine) and record.canonical_key == wanted
        ]

    def keys(self) -> tuple[str, ...]:
        seen: dict[str, None] = {}
        for record in self._records:
            if isinstance(record, AssignmentLine):
                seen.setdefault(record.canonical_key, None)
        return tuple(seen)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        indexes = self._assignment_indexes(key)
        if not indexes:
            return default
        return self._records[indexes[0]].value

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and bool(self._assignment_indexes(key))

    def _default_newline(self) -> str:
        for record in self._records:
            if record.newline:
                return record.newline
        return "\n"

    def set(self, key: str, value: str, *, append_missing: bool = True) -> bool:
        """
        Replace the value of ``key`` in place.

        Returns False only when the key is absent and append_missing is off.
        An appended line uses the canonical (uppercase) key.
        """
        if not isinstance(value, str):
            raise ValueError("value must be a string.")

        indexes = self._assignment_indexes(key)
        if not indexes:
            if not append_missing:
                return False
            newline = self._default_newline()
            if self._records and not self._records[-1].newline:
                self._records[-1] = replace(self._records[-1], newline=newline)
            self._records.append(
                AssignmentLine(prefix="", key=canonical_key(key), value=value, newline=newline)
            )
            return True

        first, duplicates = indexes[0], indexes[1:]
        self._records[first] = self._records[first].with_value(value)
        for index in reversed(duplicates):
            del self._records[index]
        return True

    def render(self) -> str:
        return "".join(record.render() for record in self._records)
