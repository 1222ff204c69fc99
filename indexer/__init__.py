"""DuckDB-backed term index."""

from .term_index import TermIndex, open_index

__all__ = [
    'TermIndex',
    'open_index',
]
