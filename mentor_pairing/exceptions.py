# mentor_pairing/exceptions.py
class BusinessLogicError(Exception):
    """Base exception for business logic errors.

    ``kind`` is the stable, machine-checkable identifier sent to clients and
    ``status_code`` the HTTP status it is reported with.
    """
    kind = "InvalidRequest"
    status_code = 400

class InvalidRequestError(BusinessLogicError):
    """Raised when the action or its fields are malformed"""
    kind = "InvalidRequest"
    status_code = 400

class AuthenticationError(BusinessLogicError):
    """Raised when the caller credential is missing or cannot be verified"""
    kind = "Unauthorized"
    status_code = 401

class NotFoundError(BusinessLogicError):
    """Raised when a resource is not found"""
    kind = "NotFound"
    status_code = 404

class MentorNotFoundError(NotFoundError):
    """Raised when a mentor is missing from the directory or unlisted"""

class PairingNotFoundError(NotFoundError):
    """Raised when a pairing id does not exist"""

class DirectoryNotFoundError(NotFoundError):
    """Raised when the mentor's directory entry is missing at accept time"""

class ForbiddenError(BusinessLogicError):
    """Raised when the caller is not the authorized actor for a transition"""
    kind = "Forbidden"
    status_code = 403

class InvalidStatusTransitionError(BusinessLogicError):
    """Raised when invalid status transition is attempted"""
    kind = "InvalidState"
    status_code = 400

class CapacityExceededError(BusinessLogicError):
    """Raised when the mentor has no slot left at accept time"""
    kind = "AtCapacity"
    status_code = 400

class NoCapacityError(CapacityExceededError):
    """Raised when the mentor shows no available slot at request time"""
    kind = "NoCapacity"

class DuplicateRequestError(BusinessLogicError):
    """Raised when a pending or accepted pairing already exists for the pair"""
    kind = "DuplicatePairing"
    status_code = 409

class TransientError(BusinessLogicError):
    """Raised when store conflicts outlast the retry budget; safe to retry"""
    kind = "Transient"
    status_code = 503
