from pymongo import MongoClient
from pymongo.database import Database

from .config import MONGODB_DB, MONGODB_URI


def get_database(uri: str = MONGODB_URI, name: str = MONGODB_DB) -> Database:
    client = MongoClient(uri, tz_aware=True, serverSelectionTimeoutMS=5000)
    return client[name]
