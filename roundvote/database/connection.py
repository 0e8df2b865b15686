from typing import Optional

from pymongo import MongoClient
from pymongo.database import Database

from roundvote import config

_client: Optional[MongoClient] = None


def get_database(uri: Optional[str] = None, db_name: Optional[str] = None) -> Database:
    """Connect lazily so importing the package never needs a running MongoDB."""
    global _client
    uri = uri or config.MONGO_URI
    db_name = db_name or config.MONGO_DB
    if not uri:
        raise ValueError("MONGO_URI not set. Check your .env file.")
    if not db_name:
        raise ValueError("MONGO_DB not set. Check your .env file.")
    if _client is None:
        _client = MongoClient(uri)
    return _client[db_name]
