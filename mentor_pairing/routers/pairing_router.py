# mentor_pairing/routers/pairing_router.py
from fastapi import APIRouter, Depends

from ..services import PairingService
from ..dependencies.auth_dependencies import get_current_caller
from ..dependencies.service_dependencies import get_pairing_service
from ..utils.response_enricher import ResponseEnricher
from ..schemas import (
    CallerIdentity, ErrorResponse, PairingAction, PairingActionResponse,
    RequestPairing, AcceptPairing, DeclinePairing, EndPairing,
)
from ..exceptions import InvalidRequestError

router = APIRouter(prefix="/api", tags=["mentor-pairing"])

@router.post(
    "/mentor-pairing",
    response_model=PairingActionResponse,
    responses={code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 405, 409, 503)},
)
def dispatch_pairing_action(
    action: PairingAction,
    caller: CallerIdentity = Depends(get_current_caller),
    pairing_service: PairingService = Depends(get_pairing_service),
):
    """Request, accept, decline or end a mentor pairing"""
    match action:
        case RequestPairing(mentor_uid=mentor_uid, message=message):
            pairing = pairing_service.request_pairing(mentor_uid, caller.uid, message, student_handle=caller.handle)
        case AcceptPairing(pairing_id=pairing_id):
            pairing = pairing_service.accept_pairing(pairing_id, caller.uid)
        case DeclinePairing(pairing_id=pairing_id, decline_reason=reason):
            pairing = pairing_service.decline_pairing(pairing_id, caller.uid, reason)
        case EndPairing(pairing_id=pairing_id):
            pairing = pairing_service.end_pairing(pairing_id, caller.uid)
        case _:
            raise InvalidRequestError("Invalid action. Must be request, accept, decline, or end.")
    return ResponseEnricher.action_response(pairing)
