"""Location index: the sorted site list and its fuzzy search."""

import logging
from collections.abc import Iterable, Sequence

from rapidfuzz.distance import Levenshtein

from forecast.models.site import Location, LocationRow

logger = logging.getLogger(__name__)


class EmptyIndexError(Exception):
    """Raised when the index is loaded with no locations."""


def build_rows(locations: Iterable[Location]) -> list[LocationRow]:
    """Project locations to rows sorted by name (stable, case-sensitive)."""
    return sorted(
        (LocationRow.from_location(loc) for loc in locations),
        key=lambda row: row.name,
    )


def is_subsequence(needle: str, haystack: str) -> bool:
    it = iter(haystack)
    return all(ch in it for ch in needle)


class LocationIndex:
    def __init__(self) -> None:
        self._rows: tuple[LocationRow, ...] = ()
        self._folded_names: tuple[str, ...] = ()

    def load(self, rows: Sequence[LocationRow]) -> None:
        if not rows:
            raise EmptyIndexError("No locations available to search")
        self._rows = tuple(rows)
        self._folded_names = tuple(row.name.lower() for row in self._rows)
        logger.info("Location index loaded with %d rows", len(self._rows))

    @property
    def rows(self) -> tuple[LocationRow, ...]:
        return self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def filter(self, query: str) -> list[LocationRow]:
        """Return rows whose name contains ``query`` as a subsequence.

        Matching ignores case. Matches are ranked by edit distance between
        query and name (closest first), ties kept in display order.
        """
        if not query:
            return list(self._rows)

        folded = query.lower()
        ranked: list[tuple[int, int]] = []
        for i, name in enumerate(self._folded_names):
            if is_subsequence(folded, name):
                ranked.append((Levenshtein.distance(folded, name), i))

        ranked.sort()
        return [self._rows[i] for _, i in ranked]
