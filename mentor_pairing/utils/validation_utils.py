# mentor_pairing/utils/validation_utils.py
from typing import Optional
from sqlalchemy.orm import Session
from ..models import MentorDirectoryEntry, Pairing, PairingStatus, OPEN_STATUSES
from ..constants import ErrorMessages
from ..exceptions import (
    CapacityExceededError, ForbiddenError, InvalidStatusTransitionError, DuplicateRequestError,
    MentorNotFoundError, PairingNotFoundError, DirectoryNotFoundError, NoCapacityError,
)

class ValidationUtils:
    def __init__(self, db: Session):
        self.db = db

    def get_directory_entry(self, mentor_id: str, for_update: bool = False) -> Optional[MentorDirectoryEntry]:
        query = self.db.query(MentorDirectoryEntry).filter(MentorDirectoryEntry.mentor_id == mentor_id)
        if for_update:
            query = query.with_for_update()
        return query.populate_existing().first()

    def get_listed_mentor_or_404(self, mentor_id: str) -> MentorDirectoryEntry:
        entry = self.get_directory_entry(mentor_id)
        if entry is None or not entry.active:
            raise MentorNotFoundError(ErrorMessages.MENTOR_NOT_FOUND)
        return entry

    def get_directory_entry_or_404(self, mentor_id: str) -> MentorDirectoryEntry:
        entry = self.get_directory_entry(mentor_id, for_update=True)
        if entry is None:
            raise DirectoryNotFoundError(ErrorMessages.DIRECTORY_NOT_FOUND)
        return entry

    def get_pairing_or_404(self, pairing_id: str) -> Pairing:
        pairing = (
            self.db.query(Pairing)
            .filter(Pairing.id == pairing_id)
            .with_for_update()
            .populate_existing()
            .first()
        )
        if pairing is None:
            raise PairingNotFoundError(ErrorMessages.PAIRING_NOT_FOUND)
        return pairing

    def validate_available_slots(self, entry: MentorDirectoryEntry):
        # Soft check only; nothing is reserved until accept. The cached column is not trusted.
        if max(0, entry.capacity - entry.active_students) <= 0:
            raise NoCapacityError(ErrorMessages.NO_AVAILABLE_SLOTS)

    def validate_mentor_capacity(self, entry: MentorDirectoryEntry):
        if entry.active_students >= entry.capacity:
            raise CapacityExceededError(ErrorMessages.AT_CAPACITY)

    def validate_actor(self, actor_id: str, allowed_ids, message: str):
        if actor_id not in allowed_ids:
            raise ForbiddenError(message)

    def check_no_open_pairing(self, mentor_id: str, student_id: str):
        existing = self.db.query(Pairing.id).filter(
            Pairing.mentor_id == mentor_id,
            Pairing.student_id == student_id,
            Pairing.status.in_(OPEN_STATUSES)
        ).first()

        if existing:
            raise DuplicateRequestError(ErrorMessages.DUPLICATE_PAIRING)

    def validate_pairing_status(self, pairing: Pairing, expected_status: PairingStatus, message: str):
        if pairing.status != expected_status.value:
            raise InvalidStatusTransitionError(message)

    def count_active_pairings_for_mentor(self, mentor_id: str) -> int:
        return self.db.query(Pairing).filter(
            Pairing.mentor_id == mentor_id,
            Pairing.status == PairingStatus.ACCEPTED.value
        ).count()
