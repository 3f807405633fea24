from .pairing_service import PairingService
from .directory_service import DirectoryService

__all__ = ["PairingService", "DirectoryService"]
