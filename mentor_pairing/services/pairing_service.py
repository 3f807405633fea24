# mentor_pairing/services/pairing_service.py
import logging
from typing import Optional
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from ..models import Pairing, PairingStatus
from ..config import get_settings
from ..constants import ErrorMessages
from ..exceptions import DuplicateRequestError, InvalidRequestError
from ..utils.transactions import run_in_transaction
from ..utils.validation_utils import ValidationUtils

logger = logging.getLogger(__name__)

class PairingService:
    """
    Sole writer of pairings and of the directory's active-student bookkeeping.

    Every operation re-reads the rows it depends on inside its own transaction
    and writes them back conditionally on their version, so a concurrent
    writer forces a re-run against fresh data instead of a lost update.
    """

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

    def request_pairing(
        self,
        mentor_id: str,
        student_id: str,
        message: Optional[str] = None,
        student_handle: Optional[str] = None,
    ) -> Pairing:
        """Creates a pending pairing; no slot is reserved until the mentor accepts"""
        if mentor_id == student_id:
            raise InvalidRequestError(ErrorMessages.SELF_REQUEST)

        def work() -> Pairing:
            entry = self.validator.get_listed_mentor_or_404(mentor_id)
            self.validator.validate_available_slots(entry)
            self.validator.check_no_open_pairing(mentor_id, student_id)

            pairing = Pairing(
                mentor_id=mentor_id,
                student_id=student_id,
                mentor_handle=entry.handle,
                student_handle=student_handle,
                mentor_type=entry.mentor_type,
                status=PairingStatus.PENDING.value,
                requested_at=datetime.now(timezone.utc),
                request_message=message,
            )
            self.db.add(pairing)
            try:
                self.db.flush()
            except IntegrityError as e:
                # Lost the race against a concurrent request for the same pair
                raise DuplicateRequestError(ErrorMessages.DUPLICATE_PAIRING) from e
            return pairing

        pairing = self._transaction(work, "request pairing")
        logger.info(f"Pairing {pairing.id} requested by student {student_id} for mentor {mentor_id}")
        return pairing

    def accept_pairing(self, pairing_id: str, acting_mentor_id: str) -> Pairing:
        """Accepts a pending pairing and consumes one of the mentor's slots"""
        def work() -> Pairing:
            pairing = self.validator.get_pairing_or_404(pairing_id)
            self.validator.validate_actor(acting_mentor_id, {pairing.mentor_id}, ErrorMessages.ONLY_MENTOR_ACCEPT)
            self.validator.validate_pairing_status(pairing, PairingStatus.PENDING, ErrorMessages.NOT_PENDING)

            entry = self.validator.get_directory_entry_or_404(pairing.mentor_id)
            self.validator.validate_mentor_capacity(entry)

            now = datetime.now(timezone.utc)
            pairing.status = PairingStatus.ACCEPTED.value
            pairing.responded_at = now

            entry.active_students = entry.active_students + 1
            entry.recompute_slots()
            entry.updated_at = now
            return pairing

        pairing = self._transaction(work, f"accept pairing {pairing_id}")
        logger.info(f"Pairing {pairing_id} accepted by mentor {acting_mentor_id}")
        return pairing

    def decline_pairing(self, pairing_id: str, acting_mentor_id: str, reason: Optional[str] = None) -> Pairing:
        """Declines a pending pairing; the directory is untouched"""
        def work() -> Pairing:
            pairing = self.validator.get_pairing_or_404(pairing_id)
            self.validator.validate_actor(acting_mentor_id, {pairing.mentor_id}, ErrorMessages.ONLY_MENTOR_DECLINE)
            self.validator.validate_pairing_status(pairing, PairingStatus.PENDING, ErrorMessages.NOT_PENDING)

            pairing.status = PairingStatus.DECLINED.value
            pairing.responded_at = datetime.now(timezone.utc)
            pairing.decline_reason = reason
            return pairing

        pairing = self._transaction(work, f"decline pairing {pairing_id}")
        logger.info(f"Pairing {pairing_id} declined by mentor {acting_mentor_id}")
        return pairing

    def end_pairing(self, pairing_id: str, acting_user_id: str) -> Pairing:
        """Ends an accepted pairing and releases the mentor's slot"""
        def work() -> Pairing:
            pairing = self.validator.get_pairing_or_404(pairing_id)
            self.validator.validate_actor(
                acting_user_id, {pairing.mentor_id, pairing.student_id}, ErrorMessages.ONLY_PARTICIPANT_END
            )
            self.validator.validate_pairing_status(pairing, PairingStatus.ACCEPTED, ErrorMessages.NOT_ACCEPTED)

            now = datetime.now(timezone.utc)
            pairing.status = PairingStatus.ENDED.value
            pairing.ended_at = now

            entry = self.validator.get_directory_entry(pairing.mentor_id, for_update=True)
            if entry is None:
                logger.warning(f"Ending pairing {pairing_id}: no directory entry for mentor {pairing.mentor_id}, skipping slot release")
            else:
                entry.active_students = max(0, entry.active_students - 1)
                entry.recompute_slots()
                entry.updated_at = now
            return pairing

        pairing = self._transaction(work, f"end pairing {pairing_id}")
        logger.info(f"Pairing {pairing_id} ended by {acting_user_id}")
        return pairing
