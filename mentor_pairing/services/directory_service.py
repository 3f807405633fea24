# mentor_pairing/services/directory_service.py
import logging
from typing import Optional
from datetime import datetime, timezone
from sqlalchemy.orm import Session

from ..models import MentorDirectoryEntry
from ..config import get_settings
from ..constants import ErrorMessages, BusinessRules, get_mentor_title
from ..exceptions import DirectoryNotFoundError
from ..utils.transactions import run_in_transaction
from ..utils.validation_utils import ValidationUtils

logger = logging.getLogger(__name__)

class DirectoryService:
    """Mentor-owned maintenance of a directory entry (listing, capacity, bio)."""

    def __init__(self, db: Session, settings=None):
        self.db = db
        self.settings = settings or get_settings()
        self.validator = ValidationUtils(db)

    def _transaction(self, work, label: str):
        return run_in_transaction(
            self.db,
            work,
            max_attempts=self.settings.PAIRING_TX_MAX_ATTEMPTS,
            backoff_seconds=self.settings.PAIRING_TX_RETRY_BACKOFF_SECONDS,
            label=label,
        )

    def _get_entry_or_404(self, mentor_id: str) -> MentorDirectoryEntry:
        entry = self.validator.get_directory_entry(mentor_id, for_update=True)
        if entry is None:
            raise DirectoryNotFoundError(ErrorMessages.DIRECTORY_NOT_PUBLISHED)
        return entry

    def publish(
        self,
        mentor_id: str,
        handle: Optional[str] = None,
        display_name: Optional[str] = None,
        mentor_type: Optional[str] = None,
        bio: Optional[str] = None,
        capacity: Optional[int] = None,
    ) -> MentorDirectoryEntry:
        """Creates or refreshes the mentor's listing and recounts its accepted pairings"""
        def work() -> MentorDirectoryEntry:
            now = datetime.now(timezone.utc)
            entry = self.validator.get_directory_entry(mentor_id, for_update=True)
            if entry is None:
                entry = MentorDirectoryEntry(
                    mentor_id=mentor_id,
                    bio="",
                    capacity=BusinessRules.DEFAULT_CAPACITY,
                    created_at=now,
                )
                self.db.add(entry)

            if handle is not None:
                entry.handle = handle
            if display_name is not None:
                entry.display_name = display_name
            if mentor_type is not None:
                entry.mentor_type = mentor_type
            entry.mentor_title = get_mentor_title(entry.mentor_type)
            if bio is not None:
                entry.bio = bio
            if capacity is not None:
                entry.capacity = capacity

            entry.active = True
            entry.active_students = self.validator.count_active_pairings_for_mentor(mentor_id)
            entry.recompute_slots()
            entry.updated_at = now
            return entry

        entry = self._transaction(work, f"publish mentor {mentor_id}")
        logger.info(f"Mentor {mentor_id} published to directory with capacity {entry.capacity}")
        return entry

    def unpublish(self, mentor_id: str) -> MentorDirectoryEntry:
        """Hides the mentor from new requests; open pairings are unaffected"""
        def work() -> MentorDirectoryEntry:
            entry = self._get_entry_or_404(mentor_id)
            entry.active = False
            entry.updated_at = datetime.now(timezone.utc)
            return entry

        entry = self._transaction(work, f"unpublish mentor {mentor_id}")
        logger.info(f"Mentor {mentor_id} unpublished from directory")
        return entry

    def update_capacity(self, mentor_id: str, capacity: int) -> MentorDirectoryEntry:
        def work() -> MentorDirectoryEntry:
            entry = self._get_entry_or_404(mentor_id)
            entry.capacity = capacity
            entry.recompute_slots()
            entry.updated_at = datetime.now(timezone.utc)
            return entry

        return self._transaction(work, f"update capacity for mentor {mentor_id}")

    def update_bio(self, mentor_id: str, bio: str) -> MentorDirectoryEntry:
        def work() -> MentorDirectoryEntry:
            entry = self._get_entry_or_404(mentor_id)
            entry.bio = bio
            entry.updated_at = datetime.now(timezone.utc)
            return entry

        return self._transaction(work, f"update bio for mentor {mentor_id}")
