import logging
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple

import duckdb
from tqdm import tqdm

import config as cfg
from query_processing.errors import StoreUnavailableError
from query_processing.models.base import IndexStore


class TermIndex(IndexStore):
    """Term counts stored in DuckDB, one row per (term, url)."""

    def __init__(self, db_path: str = cfg.DB_PATH, read_only: bool = True, table: str = cfg.DB_TABLE):
        """
        Connect to the DuckDB database holding the term counts.

        Args:
            db_path: Path to the DuckDB database (":memory:" for a throwaway index)
            read_only: Open the database read only, lookups never write
            table: Name of the term count table
        """
        self.db_path = db_path
        self.table = table
        self.read_only = read_only
        try:
            self.vdb = duckdb.connect(db_path, read_only=read_only)
            if not read_only:
                self._setup_tables()
        except duckdb.Error as e:
            logging.error(f"Could not open term index {db_path}: {e}")
            raise StoreUnavailableError(f"Could not open term index {db_path}") from e
        logging.info(f"Opened term index {db_path} (read_only={read_only})")

    def _setup_tables(self):
        """Create the term count table"""
        self.vdb.execute(f"""
            CREATE TABLE IF NOT EXISTS {self.table}(
                term TEXT,
                url TEXT,
                term_freq INTEGER,
                PRIMARY KEY (term, url)
            );
        """)

    # ------------------------------ lookup ----------------------------------
    def get_counts(self, term: str) -> Dict[str, int]:
        try:
            rows = self.vdb.execute(
                f"SELECT url, term_freq FROM {self.table} WHERE term = ? AND term_freq > 0", [term]
            ).fetchall()
        except duckdb.Error as e:
            logging.error(f"Lookup of {term!r} failed: {e}")
            raise StoreUnavailableError(f"Lookup of {term!r} failed") from e
        return {url: count for url, count in rows}

    def terms(self) -> List[str]:
        return [row[0] for row in self._fetch(f"SELECT DISTINCT term FROM {self.table} ORDER BY term")]

    def urls(self) -> List[str]:
        return [row[0] for row in self._fetch(f"SELECT DISTINCT url FROM {self.table} ORDER BY url")]

    def _fetch(self, query: str):
        try:
            return self.vdb.execute(query).fetchall()
        except duckdb.Error as e:
            logging.error(f"Listing {self.table} failed: {e}")
            raise StoreUnavailableError(f"Listing {self.table} failed") from e

    # ------------------------------ writing ---------------------------------
    def put_counts(self, url: str, counts: Mapping[str, int]):
        """Replace the term counts stored for one url."""
        rows = [(term, url, count) for term, count in counts.items() if count]
        if any(count < 0 for _, _, count in rows):
            raise ValueError(f"Negative term count for {url}")
        self.vdb.execute(f"DELETE FROM {self.table} WHERE url = ?", [url])
        if rows:
            self._insert_batch(rows)
        logging.debug(f"Stored {len(rows)} term counts for {url}")

    def load_counts(self, rows: Iterable[Tuple[str, str, int]], batch_size: int = cfg.DEFAULT_LOAD_BATCH_SIZE) -> int:
        """
        Bulk load (term, url, count) rows, overwriting counts that already exist.
        All rows are checked first, nothing is stored if one has a negative count.
        Returns the number of rows loaded.
        """
        rows = list(rows)
        for row in rows:
            if row[2] < 0:
                raise ValueError(f"Negative term count in row {row!r}")

        loaded = 0
        with tqdm(total=len(rows), desc="Loading term counts", unit="rows") as pbar:
            for start in range(0, len(rows), batch_size):
                batch = rows[start:start + batch_size]
                loaded += self._insert_batch(batch)
                pbar.update(len(batch))
        logging.info(f"Loaded {loaded} term counts into {self.table}")
        return loaded

    def _insert_batch(self, batch: List[Tuple[str, str, int]]) -> int:
        self.vdb.executemany(f"""
            INSERT INTO {self.table} (term, url, term_freq) VALUES (?, ?, ?)
            ON CONFLICT (term, url) DO UPDATE SET term_freq = excluded.term_freq;
        """, batch)
        return len(batch)

    def close(self):
        """Close the database connection."""
        if self.vdb is not None:
            self.vdb.close()
            self.vdb = None
            logging.info(f"Closed term index {self.db_path}")


@contextmanager
def open_index(db_path: str = cfg.DB_PATH, read_only: bool = True) -> Iterator[TermIndex]:
    """Open a TermIndex for the duration of a `with` block and always close it."""
    index = TermIndex(db_path, read_only=read_only)
    try:
        yield index
    finally:
        index.close()
