"""
nutag - pick and create the next semantic version tag of a repository.
"""

__version__ = "0.1.1"

from nutag.bump import Bump, BumpIntent, next_tag
from nutag.errors import ConflictingBumpError, NutagError, ParseError
from nutag.tag import Tag, initial_tag, latest_tag, parse, render

__all__ = [
    "Bump",
    "BumpIntent",
    "ConflictingBumpError",
    "NutagError",
    "ParseError",
    "Tag",
    "initial_tag",
    "latest_tag",
    "next_tag",
    "parse",
    "render",
]
