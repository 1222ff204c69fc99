from __future__ import annotations

from typing import Dict


class IndexStore:
    """
    Abstract base class for everything a query can be answered against.
    Subclasses override `get_counts`.
    """

    # --------------------------- public API ----------------------------------
    def get_counts(self, term: str) -> Dict[str, int]:
        """Map every document url containing `term` to its term frequency."""
        raise NotImplementedError
