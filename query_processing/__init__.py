"""Boolean term queries over a term-count index."""

from .errors import NoSearchTermError, SearchError, StoreUnavailableError
from .models.base import IndexStore
from .models.boolean import ScoredResultSet, difference, intersect, search, total_relevance, union
from .models.core import Document, InvertedIndex, tokenize
from .query_parser import QueryInterpreter, QueryPlan, QueryStep, parse_query, search_terms

__version__ = "1.0.0"

__all__ = [
    'SearchError',
    'NoSearchTermError',
    'StoreUnavailableError',
    'IndexStore',
    'ScoredResultSet',
    'union',
    'intersect',
    'difference',
    'search',
    'total_relevance',
    'Document',
    'InvertedIndex',
    'tokenize',
    'QueryInterpreter',
    'QueryPlan',
    'QueryStep',
    'parse_query',
    'search_terms',
]
