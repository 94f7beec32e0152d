# tastetab/database.py
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

from tastetab.core.config import settings

logger = logging.getLogger(__name__)

USERS = "users"
ITEMS = "items"
BILLS = "bills"

# MongoClient connects lazily, the lifespan hook pings before serving.
client = MongoClient(settings.MONGO_URI, serverSelectionTimeoutMS=5000)
db = client[settings.MONGO_DB_NAME]


def get_db() -> Database:
    return db


def ping(database: Database) -> None:
    database.client.admin.command("ping")
    logger.info("MongoDB connected")


def ensure_indexes(database: Database) -> None:
    users = database[USERS]
    users.create_index([("email", ASCENDING)], unique=True)
    users.create_index([("username", ASCENDING)], unique=True)
    # phone is optional; sparse keeps users without one out of the index
    users.create_index([("phone", ASCENDING)], unique=True, sparse=True)


def parse_object_id(value: str) -> Optional[ObjectId]:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def serialize_doc(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Make a Mongo document JSON-ready: ObjectIds to str, datetimes to ISO strings."""
    if doc is None:
        return None
    out = {}
    for key, value in doc.items():
        if isinstance(value, ObjectId):
            out[key] = str(value)
        elif isinstance(value, datetime):
            out[key] = value.isoformat()
        elif isinstance(value, dict):
            out[key] = serialize_doc(value)
        elif isinstance(value, list):
            out[key] = [serialize_doc(v) if isinstance(v, dict) else v for v in value]
        else:
            out[key] = value
    return out
