# mentor_pairing/constants.py
class ErrorMessages:
    MENTOR_NOT_FOUND = "Mentor not found in directory."
    PAIRING_NOT_FOUND = "Pairing not found."
    DIRECTORY_NOT_FOUND = "Mentor directory entry not found."
    DIRECTORY_NOT_PUBLISHED = "Directory entry not found. Publish first."
    SELF_REQUEST = "Cannot request yourself as mentor."
    NO_AVAILABLE_SLOTS = "Mentor has no available slots."
    AT_CAPACITY = "Mentor is at capacity."
    DUPLICATE_PAIRING = "You already have a pending or active pairing with this mentor."
    ONLY_MENTOR_ACCEPT = "Only the mentor can accept."
    ONLY_MENTOR_DECLINE = "Only the mentor can decline."
    ONLY_PARTICIPANT_END = "Only the mentor or student can end this pairing."
    NOT_PENDING = "Pairing is not pending."
    NOT_ACCEPTED = "Only accepted pairings can be ended."
    MENTOR_NOT_APPROVED = "Mentor status must be approved."
    MISSING_CREDENTIALS = "Unauthorized."
    INVALID_TOKEN = "Invalid token."
    TRANSIENT = "The pairing could not be updated due to concurrent changes. Please retry."

APPROVED_MENTOR_STATUS = "approved"

class BusinessRules:
    MAX_MESSAGE_LENGTH = 500
    MAX_BIO_LENGTH = 500
    DEFAULT_CAPACITY = 5
    MIN_CAPACITY = 1
    MAX_CAPACITY = 20

# Display titles for the mentor types a directory entry may carry
MENTOR_TYPES = {
    "scholar": "Mentor Mythologist",
    "storyteller": "Mentor Storyteller",
    "healer": "Mentor Healer",
    "mediaVoice": "Mentor Media Voice",
    "adventurer": "Mentor Adventurer",
}
DEFAULT_MENTOR_TITLE = "Mentor"

def get_mentor_title(mentor_type):
    return MENTOR_TYPES.get(mentor_type, DEFAULT_MENTOR_TITLE)
