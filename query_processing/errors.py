"""Exceptions raised while answering a term query."""


class SearchError(Exception):
    """Base class for query errors."""


class NoSearchTermError(SearchError):
    """The query holds no plain search term, only operators and exclusions."""

    def __init__(self, tokens=()):
        self.tokens = list(tokens)
        super().__init__(f"No valid search term in {self.tokens!r}")


class StoreUnavailableError(SearchError):
    """The index store could not be opened or could not answer a lookup."""
