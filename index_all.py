"""Load precomputed term counts (CSV rows of term,url,count) into the term index."""

import argparse
import csv
import logging
import time
from typing import Iterator, List, Optional, Tuple

import config as cfg
from indexer.term_index import open_index


def read_counts(csv_path: str) -> Iterator[Tuple[str, str, int]]:
    """Yield (term, url, count) rows, skipping a `term,url,count` header line."""
    with open(csv_path, newline="", encoding="utf-8") as f:
        for line_number, row in enumerate(csv.reader(f), 1):
            if not row or (line_number == 1 and row[0] == "term"):
                continue
            term, url, count = row
            yield term, url, int(count)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Load term counts into the term index")
    parser.add_argument('files', nargs='+', help='CSV files with term,url,count rows')
    parser.add_argument('--db', default=cfg.DB_PATH, help='Path to the DuckDB term index')
    parser.add_argument('--batch-size', type=int, default=cfg.DEFAULT_LOAD_BATCH_SIZE,
                        help='Rows inserted per batch')
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    _tik = time.time()
    logging.info("Starting the loading process...")
    loaded = 0
    with open_index(args.db, read_only=False) as index:
        for csv_path in args.files:
            loaded += index.load_counts(read_counts(csv_path), batch_size=args.batch_size)
    logging.info(f"Loaded {loaded} term counts in {time.time() - _tik:.2f} seconds.")
    return 0


if __name__ == "__main__":
    main()
