# mentor_pairing/models.py
import uuid
from enum import Enum
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, Index, text
from sqlalchemy.sql import func

from .database import Base
from .constants import BusinessRules

# Enum for Pairing Status
class PairingStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined" # Terminal: mentor turned the request down
    ENDED = "ended" # Terminal: either party ended an accepted pairing

# Statuses that count as an open relationship between a mentor and a student
OPEN_STATUSES = (PairingStatus.PENDING.value, PairingStatus.ACCEPTED.value)


def new_pairing_id() -> str:
    return uuid.uuid4().hex


def initial_available_slots(context):
    params = context.get_current_parameters()
    capacity = params.get("capacity")
    if capacity is None:
        capacity = BusinessRules.DEFAULT_CAPACITY
    return max(0, capacity - (params.get("active_students") or 0))


class MentorDirectoryEntry(Base):
    __tablename__ = "mentor_directory"

    mentor_id = Column(String, primary_key=True)
    handle = Column(String, nullable=True)
    display_name = Column(String, nullable=True)
    mentor_type = Column(String, nullable=True)
    mentor_title = Column(String, nullable=True)
    bio = Column(Text, nullable=False, default="")

    active = Column(Boolean, nullable=False, default=True)
    capacity = Column(Integer, nullable=False, default=BusinessRules.DEFAULT_CAPACITY)
    # Written only by pairing accept/end and by publish's recount
    active_students = Column(Integer, nullable=False, default=0)
    available_slots = Column(Integer, nullable=False, default=initial_available_slots)

    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True)

    # Every UPDATE is conditional on the version read in the same transaction
    __mapper_args__ = {"version_id_col": version}

    def recompute_slots(self):
        self.available_slots = max(0, self.capacity - self.active_students)

    def __repr__(self):
        return (f"<MentorDirectoryEntry(mentor_id='{self.mentor_id}', active={self.active}, "
                f"capacity={self.capacity}, active_students={self.active_students})>")


class Pairing(Base):
    __tablename__ = "mentor_pairings"

    id = Column(String(32), primary_key=True, default=new_pairing_id)

    mentor_id = Column(String, nullable=False, index=True)
    student_id = Column(String, nullable=False, index=True)

    # Display copies taken at request time; not authoritative
    mentor_handle = Column(String, nullable=True)
    student_handle = Column(String, nullable=True)
    mentor_type = Column(String, nullable=True)

    status = Column(String, default=PairingStatus.PENDING.value, nullable=False)

    request_message = Column(Text, nullable=True)
    decline_reason = Column(Text, nullable=True)

    requested_at = Column(DateTime(timezone=True), nullable=False)
    responded_at = Column(DateTime(timezone=True), nullable=True)
    ended_at = Column(DateTime(timezone=True), nullable=True)

    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        # At most one pending/accepted pairing per (mentor, student)
        Index(
            "uq_mentor_pairings_open_pair",
            "mentor_id",
            "student_id",
            unique=True,
            postgresql_where=text("status IN ('pending', 'accepted')"),
            sqlite_where=text("status IN ('pending', 'accepted')"),
        ),
    )

    def __repr__(self):
        return f"<Pairing(id='{self.id}', mentor_id='{self.mentor_id}', student_id='{self.student_id}', status='{self.status}')>"
