"""
Slug derivation and collision handling for generated artifact names.
"""

import re
from typing import Iterable, Set

FALLBACK_NAME = "item"
DESCRIPTION_MAX_LENGTH = 1024
ELLIPSIS = "..."

_RE_PATH_SEPARATORS = re.compile(r"[\\/]+")
_RE_COLON_OR_SPACE = re.compile(r"[:\s]+")
_RE_INVALID_CHARS = re.compile(r"[^a-z0-9_-]+")
_RE_HYPHEN_RUN = re.compile(r"-+")
_RE_WHITESPACE = re.compile(r"\s+")


def normalize_name(value: str) -> str:
    """Derive a slug matching ``[a-z0-9_-]+``. Never returns an empty string."""
    trimmed = value.strip()
    if not trimmed:
        return FALLBACK_NAME

    slug = trimmed.lower()
    slug = _RE_PATH_SEPARATORS.sub("-", slug)
    slug = _RE_COLON_OR_SPACE.sub("-", slug)
    slug = _RE_INVALID_CHARS.sub("-", slug)
    slug = _RE_HYPHEN_RUN.sub("-", slug)
    slug = slug.strip("-")
    return slug or FALLBACK_NAME


class NameRegistry:
    """Names already claimed within one bundle build."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._claimed: Set[str] = set(names)

    @classmethod
    def seeded(cls, raw_names: Iterable[str]) -> "NameRegistry":
        """Registry pre-claiming the normalized form of each name."""
        return cls(normalize_name(name) for name in raw_names)

    def __contains__(self, name: str) -> bool:
        return name in self._claimed

    def __len__(self) -> int:
        return len(self._claimed)

    def claim(self, name: str) -> None:
        self._claimed.add(name)


def unique_name(base: str, registry: NameRegistry) -> str:
    """Claim ``base``, or the first free ``base-N`` with N starting at 2."""
    if base not in registry:
        registry.claim(base)
        return base

    index = 2
    while f"{base}-{index}" in registry:
        index += 1
    name = f"{base}-{index}"
    registry.claim(name)
    return name


def sanitize_description(value: str, max_length: int = DESCRIPTION_MAX_LENGTH) -> str:
    """Collapse whitespace and clamp to ``max_length`` including the ellipsis."""
    normalized = _RE_WHITESPACE.sub(" ", value).strip()
    if len(normalized) <= max_length:
        return normalized
    cut = normalized[: max(0, max_length - len(ELLIPSIS))].rstrip()
    return cut + ELLIPSIS


def is_valid_skill_name(name: str) -> bool:
    """True when ``name`` is safe to use as a single directory entry."""
    if not name or not name.strip():
        return False
    if name in (".", ".."):
        return False
    return not any(sep in name for sep in ("/", "\\", "\0"))
