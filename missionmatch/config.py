import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths (local development only)
DATA_DIR = Path(os.getenv("MISSIONMATCH_DATA_DIR", "data"))
DB_PATH = DATA_DIR / "missionmatch.db"

# Database (PostgreSQL in production, SQLite otherwise)
DATABASE_URL = os.getenv("DATABASE_URL")

# Cache (Redis). Unset means no cache backend: every lookup is a miss.
REDIS_URL = os.getenv("REDIS_URL")
REDIS_SOCKET_TIMEOUT = float(os.getenv("REDIS_SOCKET_TIMEOUT", "0.5"))
CACHE_NAMESPACE = "matching"
CACHE_TTL_SECONDS = 180

# Candidate pool
POOL_SIZE = 100  # Coarse pre-filter before scoring, not result pagination

# Ranking
DEFAULT_LIMIT = 10
MAX_LIMIT = 50
MATCH_THRESHOLD = 0.30  # Scores must be strictly above this to be ranked
SKILL_MATCH_THRESHOLD = 100  # rapidfuzz partial ratio; 100 is exact substring

# Candidate ranking weights (mission ranking and freelancer ranking)
RANKING_WEIGHTS = {
    "skills": 0.40,
    "budget": 0.25,
    "budget_partial": 0.15,
    "experience": 0.20,
    "experience_adjacent": 0.10,
    "remote": 0.10,
    "location": 0.05,
    "rating": 0.05,
}
BUDGET_TOLERANCE = 1.2  # Rates up to 20% over budget_max get partial credit
HIGH_RATING = 4.0

# Per-application fit weights (kept separate from ranking weights)
APPLICATION_FIT_WEIGHTS = {
    "skills": 0.40,
    "budget": 0.30,
    "budget_neutral": 0.15,
    "experience": 0.20,
    "experience_mismatch": 0.10,
    "performance": 0.10,
}
