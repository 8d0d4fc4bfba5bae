"""The fixed increment policy that turns the latest tag into the next one."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from nutag.errors import ConflictingBumpError
from nutag.tag import Tag, prerelease_number

FIRST_PRERELEASE = "pre0"


class Bump(enum.Enum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


@dataclass(frozen=True)
class BumpIntent:
    """What the caller wants to advance.

    At most one of major/minor/patch fits in ``level``; ``prerelease`` starts
    or continues a ``preN`` series on top of it.
    """

    level: Optional[Bump] = None
    prerelease: bool = False

    def __post_init__(self):
        if self.level is None and not self.prerelease:
            raise ValueError("a bump intent needs a level, a prerelease, or both")

    @classmethod
    def from_flags(
        cls,
        major: bool = False,
        minor: bool = False,
        patch: bool = False,
        pre: bool = False,
    ) -> Optional["BumpIntent"]:
        """Build an intent from command line flags.

        Returns None when no flag is set so the caller can pick a default.
        """
        chosen = [
            bump
            for bump, flag in ((Bump.MAJOR, major), (Bump.MINOR, minor), (Bump.PATCH, patch))
            if flag
        ]
        if len(chosen) > 1:
            raise ConflictingBumpError(bump.value for bump in chosen)
        if not chosen and not pre:
            return None
        return cls(level=chosen[0] if chosen else None, prerelease=pre)

    def __str__(self):
        parts = [self.level.value] if self.level else []
        if self.prerelease:
            parts.append("pre")
        return "+".join(parts)


def next_prerelease(label: Optional[str]) -> str:
    number = prerelease_number(label)
    if number is None:
        return FIRST_PRERELEASE
    return f"pre{number + 1}"


def next_tag(previous: Tag, intent: BumpIntent) -> Tag:
    """Compute the tag that follows ``previous``.

    Finalizing a prerelease with a patch bump keeps the patch number
    (``0.1.1-pre5`` -> ``0.1.1``), while starting a prerelease from a release
    claims the next patch (``0.1.1`` -> ``0.1.2-pre0``).
    """
    version = previous.version.replace(build=None)
    label = previous.version.prerelease

    if intent.level is Bump.MAJOR:
        version = version.replace(
            major=version.major + 1,
            minor=0,
            patch=0,
            prerelease=next_prerelease(label) if intent.prerelease else None,
        )
    elif intent.level is Bump.MINOR:
        version = version.replace(
            minor=version.minor + 1,
            patch=0,
            prerelease=next_prerelease(label) if intent.prerelease else None,
        )
    elif intent.level is Bump.PATCH:
        patch = version.patch if previous.is_prerelease else version.patch + 1
        version = version.replace(patch=patch, prerelease=None)
    elif previous.is_prerelease:
        version = version.replace(prerelease=next_prerelease(label))
    else:
        version = version.replace(patch=version.patch + 1, prerelease=FIRST_PRERELEASE)

    return Tag(prefix=previous.prefix, version=version)
