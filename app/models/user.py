"""Pydantic models for user credentials, request counters and token claims.

These models mirror the documents stored in MongoDB. Field aliases match the
camelCase keys used in the stored documents and the JSON API.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserCredential(BaseModel):
    """Credential document keyed by email, with a bcrypt password hash."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    email: str = Field(..., description="Unique account email")
    name: str = Field(..., description="Display name")
    password: str = Field(..., description="bcrypt hash of the password")
    is_admin: bool = Field(
        default=False,
        alias="isAdmin",
        description="Whether the user may call admin endpoints",
    )


class UserRequestCounter(BaseModel):
    """Per-user request counter document."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    email: str
    request_count: int = Field(default=0, alias="requestCount", ge=0)
    last_request_timestamp: datetime | None = Field(
        default=None, alias="lastRequestTimestamp"
    )
    name: str | None = None


class EndpointStatCounter(BaseModel):
    """Per-endpoint request counter document keyed by path and method."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    endpoint: str
    method: str
    request_count: int = Field(default=0, alias="requestCount", ge=0)


class TokenClaims(BaseModel):
    """Identity carried by a verified bearer token."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    email: str
    name: str | None = None
    is_admin: bool = Field(default=False, alias="isAdmin")
