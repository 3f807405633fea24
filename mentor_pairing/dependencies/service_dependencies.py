# mentor_pairing/dependencies/service_dependencies.py
from fastapi import Depends
from sqlalchemy.orm import Session
from ..database import get_db
from ..services.pairing_service import PairingService
from ..services.directory_service import DirectoryService

def get_pairing_service(db: Session = Depends(get_db)) -> PairingService:
    return PairingService(db)

def get_directory_service(db: Session = Depends(get_db)) -> DirectoryService:
    return DirectoryService(db)
