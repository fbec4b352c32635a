"""Text and path helpers shared by the parser, the walker and the planner."""

from __future__ import annotations

import re
import unicodedata
from pathlib import PurePosixPath

SLUG_PATTERN = re.compile(r"[^a-z0-9\-]+")
WHITESPACE_PATTERN = re.compile(r"\s+")
DASH_RUN_PATTERN = re.compile(r"[-_]+")


def slugify(value: str) -> str:
    """Lowercase ASCII slug of ``value``; empty input stays empty."""
    text = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    text = WHITESPACE_PATTERN.sub("-", text.strip().lower())
    text = SLUG_PATTERN.sub("-", text)
    return DASH_RUN_PATTERN.sub("-", text).strip("-")


def title_from_stem(stem: str) -> str:
    """``deno-notes`` becomes ``Deno Notes``; acronyms keep their case."""
    words = DASH_RUN_PATTERN.sub(" ", stem).split()
    if not words:
        return "Untitled"
    return " ".join(word if word.isupper() else word.capitalize() for word in words)


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def is_single_segment(name: str) -> bool:
    """True when ``name`` can be used as one directory name inside the output tree."""
    if not name or name in {".", ".."}:
        return False
    return len(PurePosixPath(name).parts) == 1 and "/" not in name and "\\" not in name
