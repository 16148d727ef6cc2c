"""
Pydantic models for marketplace users.

Users are created by the backend from identity provider accounts and
keyed by the provider's user identifier (``clerkId``).  The role decides
which part of the application a user sees.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from .base import CamelModel


Role = Literal["GUEST", "CLIENT", "MANAGER"]

ROLES = ("GUEST", "CLIENT", "MANAGER")


class UserUpsert(CamelModel):
    """Payload for creating a user, or replacing one that already exists."""

    clerk_id: str
    email: str
    name: str
    phone: Optional[str] = None
    role: Role = "GUEST"


class UserUpdate(CamelModel):
    """Partial profile update.  Omitted fields are left untouched."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[Role] = None


class User(CamelModel):
    id: Optional[str] = None
    clerk_id: Optional[str] = None
    email: str = ""
    name: str = ""
    phone: Optional[str] = None
    role: Optional[Role] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Verification(CamelModel):
    status: str = "verified"


class EmailAddress(CamelModel):
    email_address: str
    verification: Verification = Field(default_factory=Verification)


class PhoneNumber(CamelModel):
    phone_number: str
    verification: Verification = Field(default_factory=Verification)


class PublicMetadata(CamelModel):
    role: Role = "GUEST"


class UserProfile(CamelModel):
    """Profile in the shape the identity provider uses for its own users.

    Built from a backend :class:`User` so screens written against the
    provider's user object can render marketplace users unchanged.
    Timestamps are epoch milliseconds.
    """

    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email_addresses: List[EmailAddress] = Field(default_factory=list)
    phone_numbers: List[PhoneNumber] = Field(default_factory=list)
    image_url: str = ""
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
    last_sign_in_at: Optional[int] = None
    public_metadata: PublicMetadata = Field(default_factory=PublicMetadata)

    @classmethod
    def from_user(cls, user: User, clerk_id: str) -> "UserProfile":
        """Build a profile from a backend user.

        The first word of ``name`` becomes the first name and the rest the
        last name.  ``updated_at`` falls back to ``created_at`` and is also
        reported as the last sign-in time, which the backend does not track.
        """
        parts = (user.name or "").split(" ")
        created = _epoch_millis(user.created_at)
        updated = _epoch_millis(user.updated_at or user.created_at)
        return cls(
            id=clerk_id,
            first_name=parts[0] or None,
            last_name=" ".join(parts[1:]) or None,
            email_addresses=[EmailAddress(email_address=user.email)] if user.email else [],
            phone_numbers=[PhoneNumber(phone_number=user.phone)] if user.phone else [],
            image_url=user.image_url or "",
            created_at=created,
            updated_at=updated,
            last_sign_in_at=updated,
            public_metadata=PublicMetadata(role=user.role or "GUEST"),
        )


def _epoch_millis(value: Optional[datetime]) -> Optional[int]:
    if value is None:
        return None
    return int(value.timestamp() * 1000)
