"""
Fuzzy search index over the cached values of one label.

Scoring follows the usual "threshold + distance" model of interactive
fuzzy finders:

    score = (1 - similarity) + location / distance

where ``similarity`` is the best partial alignment ratio of the query
inside a value (0..1) and ``location`` is the character offset where that
alignment starts. When the query is longer than the value, the similarity is
scaled by ``len(value) / len(query)`` so short values contained in a long
query do not count as perfect matches. A score of 0 is a perfect match at
the start of the value; values scoring above ``threshold`` are filtered out.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from rapidfuzz import fuzz

from silence_manager.core.constants import DEFAULT_SEARCH_DISTANCE, DEFAULT_SEARCH_THRESHOLD


@dataclass(frozen=True)
class SearchHit:
    """A matched value and its score (lower is closer)."""

    value: str
    score: float
    position: int


@dataclass(frozen=True)
class FuzzyIndex:
    """Read-only, case-insensitive fuzzy index built from a value list.

    Example:
        >>> index = FuzzyIndex.build(["api", "node-exporter", "prometheus"])
        >>> index.search("node")
        ['node-exporter']
    """

    values: tuple[str, ...]
    threshold: float = DEFAULT_SEARCH_THRESHOLD
    distance: int = DEFAULT_SEARCH_DISTANCE
    _folded: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not 0.0 <= self.threshold <= 1.0:
            raise ValueError(f"threshold must be within [0, 1], got {self.threshold}")
        if self.distance < 0:
            raise ValueError(f"distance must be non-negative, got {self.distance}")
        object.__setattr__(self, "_folded", tuple(v.casefold() for v in self.values))

    @classmethod
    def build(
        cls,
        values: Iterable[str],
        threshold: float = DEFAULT_SEARCH_THRESHOLD,
        distance: int = DEFAULT_SEARCH_DISTANCE,
    ) -> FuzzyIndex:
        """Build an index over ``values``, keeping their order for tie-breaks."""
        return cls(values=tuple(values), threshold=threshold, distance=distance)

    def __len__(self) -> int:
        return len(self.values)

    def _location_penalty(self, position: int) -> float:
        if self.distance == 0:
            return 0.0 if position == 0 else 1.0
        return position / self.distance

    def hits(self, query: str) -> list[SearchHit]:
        """Score every value against ``query`` and return the ranked matches."""
        needle = query.strip().casefold()
        if not needle:
            return [SearchHit(value, 0.0, 0) for value in self.values]

        cutoff = (1.0 - self.threshold) * 100
        scored: list[tuple[float, int, SearchHit]] = []
        for order, (value, folded) in enumerate(zip(self.values, self._folded)):
            alignment = fuzz.partial_ratio_alignment(needle, folded, score_cutoff=cutoff)
            if alignment is None:
                continue
            similarity = alignment.score / 100
            if len(needle) > len(folded):
                # The value only covers part of the query
                similarity *= len(folded) / len(needle)
            score = (1.0 - similarity) + self._location_penalty(alignment.dest_start)
            if score > self.threshold:
                continue
            scored.append((score, order, SearchHit(value, score, alignment.dest_start)))

        scored.sort(key=lambda item: (item[0], item[1]))
        return [hit for _, _, hit in scored]

    def search(self, query: str) -> list[str]:
        """Return matching values, closest first.

        An empty or blank query means "no filter" and returns every value.
        """
        return [hit.value for hit in self.hits(query)]


def search_values(
    values: Sequence[str],
    index: FuzzyIndex | None,
    query: str | None,
) -> list[str]:
    """Filter ``values`` through ``index``, falling back to the full list.

    The fallback applies when there is no query or no index for the label.
    """
    if index is None or not query or not query.strip():
        return list(values)
    return index.search(query)
