"""UUID utility functions for habitpomo-cli.

Short id display and unique-prefix resolution for habit ids.
"""

from __future__ import annotations

from collections.abc import Iterable


class AmbiguousPrefixError(ValueError):
    """Raised when a short id matches more than one habit."""

    def __init__(self, prefix: str, matches: list[str]):
        super().__init__(
            f"Ambiguous id '{prefix}' matches {len(matches)} habits: "
            + ", ".join(shorten_uuid(m) for m in matches)
        )
        self.prefix = prefix
        self.matches = matches


def shorten_uuid(uuid: str, length: int = 8) -> str:
    """Get shortened version of UUID.

    Args:
        uuid: Full UUID string
        length: Number of characters to return (default 8)

    Returns:
        First N characters of UUID
    """
    return uuid[:length]


def resolve_prefix(short_or_full_id: str, candidates: Iterable[str]) -> str | None:
    """Resolve a short or full id against *candidates*.

    Returns the single matching id, or None when nothing matches.

    Raises:
        AmbiguousPrefixError: If the prefix matches several candidates
    """
    needle = short_or_full_id.strip().lower()
    if not needle:
        return None

    ids = list(candidates)
    for candidate in ids:
        if candidate.lower() == needle:
            return candidate

    matches = [c for c in ids if c.lower().startswith(needle)]
    if len(matches) > 1:
        raise AmbiguousPrefixError(short_or_full_id, matches)
    return matches[0] if matches else None
