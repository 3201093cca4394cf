"""Request counter stores for per-user and per-endpoint statistics.

Increments are single ``$inc`` upserts so a missing counter is created at
zero and incremented in one atomic operation.
"""

import logging
from datetime import datetime, timezone

from pymongo.collection import Collection

from app.config import get_settings
from app.models.user import EndpointStatCounter, UserRequestCounter
from app.services import database

logger = logging.getLogger(__name__)


class UserRequestStore:
    """Per-user request counters keyed by email."""

    def __init__(self, collection_name: str):
        self.collection_name = collection_name

    @property
    def _col(self) -> Collection:
        return database.get_collection(self.collection_name)

    def increment(self, email: str, name: str | None) -> None:
        """Add one to the user's counter, creating it if absent.

        Also refreshes the last request timestamp and the denormalised name.

        Args:
            email: Account email.
            name: Name to store alongside the counter.
        """
        self._col.update_one(
            {"email": email},
            {
                "$inc": {"requestCount": 1},
                "$set": {
                    "lastRequestTimestamp": datetime.now(timezone.utc),
                    "name": name,
                },
            },
            upsert=True,
        )
        logger.debug("Incremented request count for %s", email)

    def set_absolute(self, email: str, request_count: int) -> None:
        """Overwrite the user's request count."""
        self._col.update_one(
            {"email": email},
            {"$set": {"requestCount": request_count}},
            upsert=True,
        )
        logger.info("Set request count for %s to %d", email, request_count)

    def get(self, email: str) -> UserRequestCounter | None:
        doc = self._col.find_one({"email": email}, {"_id": 0})
        if doc is None:
            return None
        return UserRequestCounter.model_validate(doc)

    def delete(self, email: str) -> None:
        self._col.delete_one({"email": email})

    def scan_all(self) -> list[UserRequestCounter]:
        """Return every user counter (full collection scan)."""
        docs = self._col.find({}, {"_id": 0})
        return [UserRequestCounter.model_validate(doc) for doc in docs]


class EndpointStatStore:
    """Per-endpoint request counters keyed by path and HTTP method."""

    def __init__(self, collection_name: str):
        self.collection_name = collection_name

    @property
    def _col(self) -> Collection:
        return database.get_collection(self.collection_name)

    def increment(self, endpoint: str, method: str) -> None:
        """Add one to the counter for (endpoint, method), creating it if absent."""
        self._col.update_one(
            {"endpoint": endpoint, "method": method},
            {"$inc": {"requestCount": 1}},
            upsert=True,
        )

    def scan_all(self) -> list[EndpointStatCounter]:
        """Return every endpoint counter (full collection scan)."""
        docs = self._col.find({}, {"_id": 0})
        return [EndpointStatCounter.model_validate(doc) for doc in docs]


def get_user_request_store() -> UserRequestStore:
    """Build a UserRequestStore on the configured collection."""
    settings = get_settings()
    return UserRequestStore(settings.mongo.user_requests_collection)


def get_endpoint_stat_store() -> EndpointStatStore:
    """Build an EndpointStatStore on the configured collection."""
    settings = get_settings()
    return EndpointStatStore(settings.mongo.endpoint_stats_collection)
