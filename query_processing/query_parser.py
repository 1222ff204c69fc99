"""Turns the command line tokens of a query into lookups and result merges."""

from __future__ import annotations

import logging
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence

import config as cfg

from .errors import NoSearchTermError
from .models.base import IndexStore
from .models.boolean import Combiner, ScoredResultSet, search, total_relevance


class ParseState(Enum):
    SEEK_FIRST_TERM = "seek_first_term"
    ACCUMULATE = "accumulate"
    DONE = "done"


def is_operator(token: str) -> bool:
    return token in cfg.OPERATORS


def is_exclusion(token: str) -> bool:
    return token.startswith(cfg.EXCLUDE_PREFIX)


@dataclass(frozen=True)
class QueryStep:
    """Merge the results of `term` into the running result with `operator`."""

    operator: str
    term: str


@dataclass
class QueryPlan:
    first_term: Optional[str] = None
    steps: List[QueryStep] = field(default_factory=list)
    excludes: List[str] = field(default_factory=list)

    @property
    def has_term(self) -> bool:
        return self.first_term is not None

    def lookup_order(self) -> List[str]:
        """Every term the plan looks up, in the order the lookups happen."""
        if not self.has_term:
            return []
        return [self.first_term] + [step.term for step in self.steps] + self.excluded_terms()

    def excluded_terms(self) -> List[str]:
        return [token[len(cfg.EXCLUDE_PREFIX):] for token in self.excludes]


def parse_query(tokens: Sequence[str]) -> QueryPlan:
    """
    Scan the tokens left to right.

    - Before the first plain term, `-` tokens are collected and operators are skipped.
    - A plain term after it is ANDed into the result, no operator needed.
    - `AND` / `OR` take the next token, whatever it is, as their operand.
      An operator at the very end is ignored.
    - `-` tokens anywhere are collected and subtracted once the scan is over.
    """
    tokens = [token for token in tokens if token]
    plan = QueryPlan()
    state = ParseState.SEEK_FIRST_TERM
    position = 0

    while state is not ParseState.DONE:
        if position >= len(tokens):
            state = ParseState.DONE
            continue
        token = tokens[position]
        position += 1

        if is_exclusion(token):
            plan.excludes.append(token)
        elif state is ParseState.SEEK_FIRST_TERM:
            if not is_operator(token):
                plan.first_term = token
                state = ParseState.ACCUMULATE
        elif not is_operator(token):
            plan.steps.append(QueryStep("AND", token))
        elif position >= len(tokens):
            logging.debug(f"Dropping trailing operator {token!r}")
            state = ParseState.DONE
        else:
            # operand is taken as written, even an operator or a "-" token
            plan.steps.append(QueryStep(token, tokens[position]))
            position += 1

    return plan


class QueryInterpreter:
    """Executes query plans against an index store, one blocking lookup at a time."""

    def __init__(self, index: IndexStore, combiner: Combiner = total_relevance):
        self.index = index
        self.combiner = combiner

    def lookup(self, term: str) -> ScoredResultSet:
        logging.debug(f"Looking up {term!r}")
        return search(term, self.index, self.combiner)

    def execute(self, plan: QueryPlan) -> ScoredResultSet:
        if not plan.has_term:
            raise NoSearchTermError(plan.excludes)

        results = self.lookup(plan.first_term)
        for step in plan.steps:
            other = self.lookup(step.term)
            if step.operator == "OR":
                results = results.union(other)
            else:
                results = results.intersect(other)

        for term in plan.excluded_terms():
            results = results.difference(self.lookup(term))

        logging.info(f"Query matched {len(results.matches())} of {len(results)} documents")
        return results

    def run(self, tokens: Sequence[str]) -> ScoredResultSet:
        return self.execute(parse_query(tokens))


def search_terms(
    tokens: Sequence[str],
    index_factory: Callable[[], AbstractContextManager],
    combiner: Combiner = total_relevance,
) -> Optional[ScoredResultSet]:
    """
    Parse `tokens` and, if they hold a search term, answer them against the index
    opened by `index_factory` (a context manager). The index is closed again however
    the query ends and is never opened for a query without terms.

    Returns None when there is no valid search term.
    """
    plan = parse_query(tokens)
    if not plan.has_term:
        logging.info(f"No valid search term in {list(tokens)!r}")
        return None

    with index_factory() as index:
        return QueryInterpreter(index, combiner).execute(plan)
