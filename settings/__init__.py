"""Application settings."""

import os
from pathlib import Path

# Database
DB_PATH = os.getenv("VOTES_DB_PATH", "votes.duckdb")

# Logging
LOG_DIR = Path("logs")

# Ballots provider
BALLOTS_BASE_URL = os.getenv("VOTES_BASE_URL", "https://www.nosdeputes.fr")
DEFAULT_SESSION = int(os.getenv("VOTES_SESSION", "16"))

# Knowledge graph
SPARQL_URL = os.getenv("VOTES_SPARQL_URL", "https://query.wikidata.org/sparql")
GRAPH_BATCH_SIZE = 50
GRAPH_MIN_INTERVAL = 0.1

# HTTP
API_TIMEOUT = 30.0
MAX_REDIRECTS = 5
USER_AGENT = "TransparencePolitique/1.0"

# Sync
ITEM_DELAY = 1.0
DELAY_EVERY = 10
PROGRESS_EVERY = 50
RETRY_ATTEMPTS = 2
