from datetime import datetime
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from .models import PairingStatus
from .constants import BusinessRules, APPROVED_MENTOR_STATUS


def bound_free_text(value: Optional[str]) -> Optional[str]:
    """Strips free text, maps blank to None and truncates to the message limit."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    return value[:BusinessRules.MAX_MESSAGE_LENGTH]


class CamelModel(BaseModel):
    # Wire format is camelCase (mentorUid, pairingId, declineReason)
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


# --- Identity ---

class CallerIdentity(BaseModel):
    uid: str
    handle: Optional[str] = None
    # Mentor program status granted by the identity provider, e.g. "approved"
    mentor_status: Optional[str] = None

    @property
    def is_approved_mentor(self) -> bool:
        return self.mentor_status == APPROVED_MENTOR_STATUS


# --- Pairing actions (one variant per action, discriminated on "action") ---

class RequestPairing(CamelModel):
    action: Literal["request"]
    mentor_uid: str = Field(..., min_length=1, description="Directory id of the requested mentor.")
    message: Optional[str] = Field(None, description="Optional note from the student.")

    @field_validator("message")
    @classmethod
    def bound_message(cls, value):
        return bound_free_text(value)

class AcceptPairing(CamelModel):
    action: Literal["accept"]
    pairing_id: str = Field(..., min_length=1)

class DeclinePairing(CamelModel):
    action: Literal["decline"]
    pairing_id: str = Field(..., min_length=1)
    decline_reason: Optional[str] = None

    @field_validator("decline_reason")
    @classmethod
    def bound_reason(cls, value):
        return bound_free_text(value)

class EndPairing(CamelModel):
    action: Literal["end"]
    pairing_id: str = Field(..., min_length=1)

PairingAction = Annotated[
    Union[RequestPairing, AcceptPairing, DeclinePairing, EndPairing],
    Field(discriminator="action"),
]


class PairingResponse(CamelModel):
    id: str
    mentor_id: str
    student_id: str
    mentor_handle: Optional[str] = None
    student_handle: Optional[str] = None
    mentor_type: Optional[str] = None
    status: PairingStatus
    request_message: Optional[str] = None
    decline_reason: Optional[str] = None
    requested_at: datetime
    responded_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }

class PairingActionResponse(CamelModel):
    success: bool = True
    status: PairingStatus
    pairing_id: str
    pairing: Optional[PairingResponse] = None

class ErrorResponse(BaseModel):
    success: bool = False
    error: str = Field(..., description="Stable error kind, e.g. AtCapacity.")
    message: str


# --- Directory actions ---

class PublishDirectoryEntry(CamelModel):
    action: Literal["publish"]
    handle: Optional[str] = Field(None, max_length=50)
    display_name: Optional[str] = Field(None, max_length=100)
    mentor_type: Optional[str] = None
    bio: Optional[str] = Field(None, max_length=BusinessRules.MAX_BIO_LENGTH)
    capacity: Optional[int] = Field(None, ge=BusinessRules.MIN_CAPACITY, le=BusinessRules.MAX_CAPACITY)

class UnpublishDirectoryEntry(CamelModel):
    action: Literal["unpublish"]

class UpdateDirectoryCapacity(CamelModel):
    action: Literal["update-capacity"]
    capacity: int = Field(..., ge=BusinessRules.MIN_CAPACITY, le=BusinessRules.MAX_CAPACITY)

class UpdateDirectoryBio(CamelModel):
    action: Literal["update-bio"]
    bio: str = Field(..., max_length=BusinessRules.MAX_BIO_LENGTH)

DirectoryAction = Annotated[
    Union[PublishDirectoryEntry, UnpublishDirectoryEntry, UpdateDirectoryCapacity, UpdateDirectoryBio],
    Field(discriminator="action"),
]

class DirectoryEntryResponse(CamelModel):
    mentor_id: str
    handle: Optional[str] = None
    display_name: Optional[str] = None
    mentor_type: Optional[str] = None
    mentor_title: Optional[str] = None
    bio: str
    active: bool
    capacity: int
    active_students: int
    available_slots: int

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }

class DirectoryActionResponse(CamelModel):
    success: bool = True
    status: str
    entry: DirectoryEntryResponse
