"""Release tags: an optional namespace prefix plus a semantic version.

Tags look like ``v1.2.3``, ``v1.2.3-pre4`` or ``service-a@v1.2.3``. The
version body is parsed with :mod:`semver`; ordering follows semver
precedence except that digit runs inside prerelease labels compare as
numbers, so ``pre10`` sorts after ``pre9``.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional

import semver

from nutag.errors import ParseError

PREFIX_SEPARATOR = "@"
VERSION_MARKER = "v"

PRERELEASE_PATTERN = re.compile(r"^pre(\d+)$")
DIGIT_RUNS = re.compile(r"(\d+)")


def prerelease_number(label: Optional[str]) -> Optional[int]:
    """Return N for a ``preN`` label, None for anything else."""
    if not label:
        return None
    match = PRERELEASE_PATTERN.match(label)
    return int(match.group(1)) if match else None


def _natural_key(label: str) -> tuple:
    # Text and digit runs alternate, starting with text: "pre10" -> ("pre", 10, "")
    parts = DIGIT_RUNS.split(label)
    return tuple(int(part) if i % 2 else part for i, part in enumerate(parts))


def _prerelease_key(label: Optional[str]) -> tuple:
    # Releases sort after every prerelease of the same major.minor.patch.
    if not label:
        return (1,)
    return (0, _natural_key(label), label)


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Tag:
    """Immutable release tag."""

    prefix: Optional[str]
    version: semver.Version

    def __post_init__(self):
        if self.prefix == "":
            object.__setattr__(self, "prefix", None)

    @property
    def is_prerelease(self) -> bool:
        return bool(self.version.prerelease)

    def _sort_key(self) -> tuple:
        v = self.version
        return (
            v.major,
            v.minor,
            v.patch,
            _prerelease_key(v.prerelease),
            self.prefix is not None,
            self.prefix or "",
        )

    def __eq__(self, other):
        if not isinstance(other, Tag):
            return NotImplemented
        return self._sort_key() == other._sort_key()

    def __lt__(self, other):
        if not isinstance(other, Tag):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __hash__(self):
        return hash(self._sort_key())

    def __str__(self):
        return render(self)


def parse(raw: str) -> Tag:
    """Parse ``[<prefix>@]v<major>.<minor>.<patch>[-<pre>][+<build>]``."""
    prefix, sep, body = raw.rpartition(PREFIX_SEPARATOR)
    if not sep:
        prefix = None
    if body.startswith(VERSION_MARKER):
        body = body[len(VERSION_MARKER):]
    try:
        version = semver.Version.parse(body)
    except (ValueError, TypeError) as exc:
        raise ParseError(raw, str(exc)) from exc
    return Tag(prefix=prefix, version=version)


def render(tag: Tag) -> str:
    v = tag.version
    text = f"{VERSION_MARKER}{v.major}.{v.minor}.{v.patch}"
    if v.prerelease:
        text += f"-{v.prerelease}"
    if tag.prefix is not None:
        text = f"{tag.prefix}{PREFIX_SEPARATOR}{text}"
    return text


def parse_many(candidates: Iterable[str]) -> List[Tag]:
    """Parse every candidate, silently dropping the ones that are not tags."""
    tags = []
    for raw in candidates:
        try:
            tags.append(parse(raw))
        except ParseError:
            continue
    return tags


def initial_tag(prefix: Optional[str] = None) -> Tag:
    return Tag(prefix=prefix, version=semver.Version(0, 1, 0))


def latest_tag(candidates: Iterable[str], prefix: Optional[str] = None) -> Tag:
    """Highest tag in ``candidates`` whose prefix is exactly ``prefix``.

    Falls back to the initial ``0.1.0`` tag when nothing matches.
    """
    prefix = prefix or None
    matching = [tag for tag in parse_many(candidates) if tag.prefix == prefix]
    if not matching:
        return initial_tag(prefix)
    return max(matching)
