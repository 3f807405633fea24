# mentor_pairing/routers/directory_router.py
from fastapi import APIRouter, Depends

from ..services import DirectoryService
from ..dependencies.auth_dependencies import get_approved_mentor
from ..dependencies.service_dependencies import get_directory_service
from ..schemas import (
    CallerIdentity, DirectoryAction, DirectoryActionResponse, DirectoryEntryResponse, ErrorResponse,
    PublishDirectoryEntry, UnpublishDirectoryEntry, UpdateDirectoryCapacity, UpdateDirectoryBio,
)
from ..exceptions import InvalidRequestError

router = APIRouter(prefix="/api", tags=["mentor-directory"])

@router.post(
    "/mentor-directory",
    response_model=DirectoryActionResponse,
    responses={code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 405, 503)},
)
def dispatch_directory_action(
    action: DirectoryAction,
    caller: CallerIdentity = Depends(get_approved_mentor),
    directory_service: DirectoryService = Depends(get_directory_service),
):
    """Publish, unpublish or edit the caller's own mentor directory entry"""
    match action:
        case PublishDirectoryEntry():
            entry = directory_service.publish(
                caller.uid,
                handle=action.handle or caller.handle,
                display_name=action.display_name,
                mentor_type=action.mentor_type,
                bio=action.bio,
                capacity=action.capacity,
            )
            status = "published"
        case UnpublishDirectoryEntry():
            entry = directory_service.unpublish(caller.uid)
            status = "unpublished"
        case UpdateDirectoryCapacity(capacity=capacity):
            entry = directory_service.update_capacity(caller.uid, capacity)
            status = "updated"
        case UpdateDirectoryBio(bio=bio):
            entry = directory_service.update_bio(caller.uid, bio)
            status = "updated"
        case _:
            raise InvalidRequestError("Invalid action.")
    return DirectoryActionResponse(status=status, entry=DirectoryEntryResponse.model_validate(entry))
