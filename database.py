"""
MongoDB connection shared by the storefront.

Records live in two collections, ``products`` and ``orders``. A record's
``_id`` is its public ``id``, so ``products/p1`` is the document
``{"_id": "p1"}`` in ``products``.
"""
import logging
import os
from typing import Any, Dict, List, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel
from pymongo import MongoClient

load_dotenv()

logger = logging.getLogger("rfap.database")

database_url = os.getenv("DATABASE_URL")
database_name = os.getenv("DATABASE_NAME")

client: Optional[MongoClient] = None
db = None

if database_url and database_name:
    client = MongoClient(database_url)
    db = client[database_name]
else:
    logger.warning("DATABASE_URL / DATABASE_NAME not set, database disabled")


def get_db():
    if db is None:
        raise RuntimeError("Database not available. Check DATABASE_URL and DATABASE_NAME.")
    return db


def create_document(collection_name: str, data: Union[BaseModel, Dict[str, Any]]) -> str:
    """Insert a record and return its key. A record carrying ``id`` is stored under that key."""
    doc = data.model_dump() if isinstance(data, BaseModel) else dict(data)
    if doc.get("id") is not None:
        doc["_id"] = doc["id"]
    result = get_db()[collection_name].insert_one(doc)
    return str(result.inserted_id)


def get_documents(collection_name: str, filter_dict: Optional[Dict[str, Any]] = None,
                  limit: Optional[int] = None) -> List[Dict[str, Any]]:
    cursor = get_db()[collection_name].find(filter_dict or {}, {"_id": 0})
    if limit:
        cursor = cursor.limit(limit)
    return list(cursor)
