# roundvote/config.py
# Central place for thresholds, constants and environment settings
import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


# --- Identity token format ---
IDENTITY_LENGTH = 8
IDENTITY_CATEGORIES = ("A", "B", "C")
ODD_POSITION_WEIGHT = 3
EVEN_POSITION_WEIGHT = 1

# --- Candidate / voter constraints ---
MIN_CANDIDATE_ID = 1
MAX_CANDIDATE_ID = 255
MIN_PARTY_NUMBER = 1
MAX_PARTY_NUMBER = 255
MIN_AGE = 18

# --- Round policy defaults ---
ENFORCE_TIME_WINDOW = _env_flag("ENFORCE_TIME_WINDOW", False)
STRICT_PARTY_NUMBERS = _env_flag("STRICT_PARTY_NUMBERS", False)
REQUIRE_CANDIDATE_IDENTITY = _env_flag("REQUIRE_CANDIDATE_IDENTITY", False)
ALLOW_CANDIDATE_REMOVAL = _env_flag("ALLOW_CANDIDATE_REMOVAL", False)

# Comma separated accounts allowed to administer rounds
ADMIN_ACCOUNTS = [a.strip() for a in os.getenv("ADMIN_ACCOUNTS", "").split(",") if a.strip()]

# --- Security & JWT Config ---
# In production, use secure, environment-variable-based secrets
SECRET_KEY = os.getenv("SECRET_KEY", "a_very_secret_key_for_dev_only")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 30

# --- Database Config ---
MONGO_URI = os.getenv("MONGO_URI")
MONGO_DB = os.getenv("MONGO_DB", "roundvote")
ROUNDS_COLLECTION_NAME = "rounds"
CANDIDATES_COLLECTION_NAME = "candidates"
VOTERS_COLLECTION_NAME = "voters"
LOGS_COLLECTION_NAME = "logs"
