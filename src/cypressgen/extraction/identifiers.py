"""
Identifier synthesis.

Turns raw labels such as ``"input email address"`` into code-safe
lower-camel-case identifiers (``inputEmailAddress``) and keeps them unique
within one generation run by appending ``2``, ``3``, ... on collision.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_WORD_BOUNDARY = re.compile(r"[^A-Za-z0-9]+")

FALLBACK_IDENTIFIER = "element"


def to_camel_case(label: str) -> str:
    """Lower-camel-case a label; non-alphanumeric runs split words."""
    words = [w for w in _WORD_BOUNDARY.split(label) if w]
    if not words:
        return FALLBACK_IDENTIFIER
    head, *tail = words
    identifier = head[0].lower() + head[1:] + "".join(w[0].upper() + w[1:] for w in tail)
    if identifier[0].isdigit():
        identifier = f"{FALLBACK_IDENTIFIER}{identifier}"
    return identifier


def capitalize(identifier: str) -> str:
    """Upper-case the first character only."""
    return identifier[:1].upper() + identifier[1:]


def synthesize(raw_label: str, used: set[str]) -> str:
    """
    Synthesize a unique identifier for raw_label and record it in used.

    Args:
        raw_label: Human-readable label from the locator resolver
        used: Identifiers already taken in this run; mutated

    Returns:
        The new identifier
    """
    base = to_camel_case(raw_label)
    identifier = base
    suffix = 2
    while identifier in used:
        identifier = f"{base}{suffix}"
        suffix += 1
    used.add(identifier)
    return identifier


@dataclass(frozen=True)
class IdentifierRegistry:
    """
    Immutable registry of identifiers taken within one generation run.

    Threaded through the classification fold: each claim returns the new
    identifier together with a new registry, so no state is shared between
    runs or hidden on an object.
    """

    used: frozenset[str] = frozenset()

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.used

    def __len__(self) -> int:
        return len(self.used)

    def claim(self, raw_label: str) -> tuple[str, IdentifierRegistry]:
        taken = set(self.used)
        identifier = synthesize(raw_label, taken)
        return identifier, IdentifierRegistry(frozenset(taken))
