DB_PATH = "termIndex.db"  # Path to the DuckDB database holding the term counts
DB_TABLE = "term_counts"  # Table name in the DuckDB database (term, url, count)

DEFAULT_LOAD_BATCH_SIZE = 5000  # Default batch size for bulk loading term counts

LOG_LEVEL = "WARNING"  # Default log level for the search CLI, lookups are logged at DEBUG

OPERATORS = ("AND", "OR")  # Query operators, matched case sensitively
EXCLUDE_PREFIX = "-"  # Prefix marking a term whose documents are removed from the result

NO_TERM_MESSAGE = "Please enter at least one valid search term."
