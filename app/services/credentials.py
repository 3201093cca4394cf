"""Credential store for the authentication collection.

Single-key get/put/delete of user credentials keyed by email.
"""

import logging

from pymongo.collection import Collection

from app.config import get_settings
from app.models.user import UserCredential
from app.services import database

logger = logging.getLogger(__name__)


class CredentialStore:
    """Read and write UserCredential documents in one collection.

    The collection is resolved on each call so that connection errors
    surface from the store methods.
    """

    def __init__(self, collection_name: str):
        self.collection_name = collection_name

    @property
    def _col(self) -> Collection:
        return database.get_collection(self.collection_name)

    def get(self, email: str) -> UserCredential | None:
        """Look up a credential by email.

        Args:
            email: Account email.

        Returns:
            The credential, or None if no account uses this email.
        """
        doc = self._col.find_one({"email": email}, {"_id": 0})
        if doc is None:
            return None
        return UserCredential.model_validate(doc)

    def put(self, credential: UserCredential) -> None:
        """Insert the credential, overwriting any record with the same email."""
        self._col.replace_one(
            {"email": credential.email},
            credential.model_dump(by_alias=True),
            upsert=True,
        )
        logger.debug("Stored credential for %s", credential.email)

    def delete(self, email: str) -> bool:
        """Delete the credential for email.

        Returns:
            True if a record was removed.
        """
        result = self._col.delete_one({"email": email})
        logger.debug("Deleted %d credential(s) for %s", result.deleted_count, email)
        return result.deleted_count > 0


def get_credential_store() -> CredentialStore:
    """Build a CredentialStore on the configured credentials collection."""
    settings = get_settings()
    return CredentialStore(settings.mongo.credentials_collection)
