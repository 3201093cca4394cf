"""MongoDB database service for credentials and request counters.

Provides functions for connecting to MongoDB, resolving collections and
creating the indexes that enforce the key of each collection.
"""

import logging

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from app.config import get_settings

logger = logging.getLogger(__name__)

# Global MongoDB client instance
_client: MongoClient | None = None


def get_client() -> MongoClient:
    """Get or create the MongoDB client singleton.

    Returns:
        MongoClient instance.
    """
    global _client
    if _client is None:
        settings = get_settings()
        logger.info("Connecting to MongoDB...")
        _client = MongoClient(settings.mongo.uri, tz_aware=True)
        logger.info("MongoDB connection established")
    return _client


def get_database() -> Database:
    """Get the application database.

    Returns:
        Database instance for credentials and counters.
    """
    settings = get_settings()
    client = get_client()
    return client[settings.mongo.db_name]


def get_collection(name: str) -> Collection:
    """Get a collection by name from the application database.

    Args:
        name: Collection name.

    Returns:
        Collection instance.
    """
    db = get_database()
    return db[name]


def ensure_indexes() -> None:
    """Create the unique indexes that act as each collection's key.

    Creates indexes on:
    - authentication: (email) unique
    - UserRequests: (email) unique
    - EndpointStats: (endpoint, method) unique
    """
    settings = get_settings()
    db = get_database()

    logger.info("Ensuring database indexes...")

    db[settings.mongo.credentials_collection].create_index(
        [("email", ASCENDING)],
        name="email_unique",
        unique=True,
    )

    db[settings.mongo.user_requests_collection].create_index(
        [("email", ASCENDING)],
        name="email_unique",
        unique=True,
    )

    db[settings.mongo.endpoint_stats_collection].create_index(
        [("endpoint", ASCENDING), ("method", ASCENDING)],
        name="endpoint_method_unique",
        unique=True,
    )

    logger.info("Database indexes created successfully")


def close_client() -> None:
    """Close the MongoDB client connection gracefully."""
    global _client
    if _client is not None:
        logger.info("Closing MongoDB connection...")
        _client.close()
        _client = None
        logger.info("MongoDB connection closed")
