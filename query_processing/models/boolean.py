"""
Boolean search results
===========================
Aspect ----------------------- Notes
Idea ----------------------- Each query term yields a map url -> term frequency. AND / OR / NOT merge two such
                             maps into a new one, so a whole query folds into a single scored result.
Score ----------------------- The relevance of a url for several terms is `total_relevance` of the per-term
                              scores (the sum of the term frequencies). A missing url has relevance 0.
Quirks ----------------------- • AND walks the left operand only: urls found only on the right never show up,
                                 and left urls that miss the right term are kept with score 0.
                               • NOT drops every url the right operand scores above 0.
Typical Uses ----------------------- Command line queries such as `java AND programming -coffee`.

"""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Dict, Iterator, List, Mapping, Set, Tuple

from .base import IndexStore

Combiner = Callable[[int, int], int]


def total_relevance(rel1: int, rel2: int) -> int:
    """
    Relevance of a url for two terms.

    Simple starting place: the sum of the term frequencies. Any replacement must stay
    symmetric, non-negative and non-decreasing in both arguments.
    """
    return rel1 + rel2


class ScoredResultSet:
    """
    Results of a search query: a read-only map from url to relevance score.
    Combinators return a new ScoredResultSet and never touch their operands.
    """

    def __init__(self, scores: Mapping[str, int], combiner: Combiner = total_relevance):
        for url, score in scores.items():
            if score < 0:
                raise ValueError(f"Negative relevance {score} for {url}")
        self._scores = MappingProxyType(dict(scores))
        self.combiner = combiner

    # --------------------------- lookup --------------------------------------
    @property
    def scores(self) -> Mapping[str, int]:
        return self._scores

    def relevance(self, url: str) -> int:
        """Looks up the relevance of a url, 0 when it is absent."""
        return self._scores.get(url, 0)

    def documents(self) -> Set[str]:
        return set(self._scores)

    def matches(self) -> Set[str]:
        """Urls with a non-zero score, i.e. the ones that really satisfy the query."""
        return {url for url, score in self._scores.items() if score}

    def sort(self) -> List[Tuple[str, int]]:
        """Entries ordered by ascending relevance, ties keep insertion order."""
        return sorted(self._scores.items(), key=lambda entry: entry[1])

    # --------------------------- algebra -------------------------------------
    def union(self, other: ScoredResultSet) -> ScoredResultSet:
        """Every url of either result, scored with `combiner`."""
        urls = list(self._scores)
        urls.extend(url for url in other.scores if url not in self._scores)
        union = {url: self.combiner(self.relevance(url), other.relevance(url)) for url in urls}
        return ScoredResultSet(union, self.combiner)

    def intersect(self, other: ScoredResultSet) -> ScoredResultSet:
        """Urls of this result, scored only where both results have them, 0 elsewhere."""
        intersection: Dict[str, int] = {}
        for url in self._scores:
            mine, theirs = self.relevance(url), other.relevance(url)
            if mine != 0 and theirs != 0:
                intersection[url] = self.combiner(mine, theirs)
            else:
                intersection[url] = 0
        return ScoredResultSet(intersection, self.combiner)

    def difference(self, other: ScoredResultSet) -> ScoredResultSet:
        """Urls of this result that `other` gives no relevance, with their scores unchanged."""
        remaining = {url: score for url, score in self._scores.items() if other.relevance(url) == 0}
        return ScoredResultSet(remaining, self.combiner)

    or_ = union
    and_ = intersect
    minus = difference

    # --------------------------- dunder --------------------------------------
    def __len__(self) -> int:
        return len(self._scores)

    def __iter__(self) -> Iterator[str]:
        return iter(self._scores)

    def __contains__(self, url: object) -> bool:
        return url in self._scores

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScoredResultSet):
            return NotImplemented
        return dict(self._scores) == dict(other.scores)

    __hash__ = None

    def __repr__(self) -> str:
        return f"ScoredResultSet({dict(self._scores)!r})"


def union(a: ScoredResultSet, b: ScoredResultSet) -> ScoredResultSet:
    return a.union(b)


def intersect(a: ScoredResultSet, b: ScoredResultSet) -> ScoredResultSet:
    return a.intersect(b)


def difference(a: ScoredResultSet, b: ScoredResultSet) -> ScoredResultSet:
    return a.difference(b)


def search(term: str, index: IndexStore, combiner: Combiner = total_relevance) -> ScoredResultSet:
    """Performs a lookup and wraps the counts into a ScoredResultSet."""
    return ScoredResultSet(index.get_counts(term), combiner)
