import re
from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List

from .base import IndexStore


# --------------------------------------------------------------------------- #
#  Tokenisation                                                               #
# --------------------------------------------------------------------------- #
def tokenize(text: str) -> List[str]:
    """Very small regex tokenizer, lower-cased words only."""
    return re.findall(r"[^\W\d_]+", text.lower())


# --------------------------------------------------------------------------- #
#  Document / Inverted-Index                                                  #
# --------------------------------------------------------------------------- #
@dataclass
class Document:
    url: str
    text: str

    @property
    def terms(self) -> List[str]:
        return tokenize(self.text)


class InvertedIndex(IndexStore):
    """
    In-memory term -> {url: count} index (enough for demos and tests).
    Answers the same lookups as the DuckDB-backed `indexer.term_index.TermIndex`.
    """

    def __init__(self, documents: Iterable[Document] = ()) -> None:
        self.postings: Dict[str, Dict[str, int]] = defaultdict(dict)
        self.doc_len: Dict[str, int] = {}
        for doc in documents:
            self.add_document(doc)

    # ------------------------------ building --------------------------------
    def add_document(self, doc: Document) -> None:
        self.put_counts(doc.url, Counter(doc.terms))

    def put_counts(self, url: str, counts: Dict[str, int]) -> None:
        """Replace the term counts stored for `url`, leaving them untouched on a bad count."""
        for term, count in counts.items():
            if count < 0:
                raise ValueError(f"Negative count {count} for term {term!r} in {url}")
        for postings in self.postings.values():
            postings.pop(url, None)
        for term, count in counts.items():
            if count:
                self.postings[term][url] = count
        self.doc_len[url] = sum(counts.values())

    # ------------------------------ lookup ----------------------------------
    def get_counts(self, term: str) -> Dict[str, int]:
        return dict(self.postings.get(term, {}))

    def terms(self) -> List[str]:
        return sorted(term for term, postings in self.postings.items() if postings)

    def urls(self) -> List[str]:
        return sorted(self.doc_len)
