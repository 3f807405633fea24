# mentor_pairing/utils/error_handlers.py
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..exceptions import BusinessLogicError
from ..schemas import ErrorResponse

logger = logging.getLogger(__name__)

# Kinds for errors raised by the framework itself rather than by the service
HTTP_STATUS_KINDS = {
    400: "InvalidRequest",
    401: "Unauthorized",
    403: "Forbidden",
    404: "NotFound",
    405: "MethodNotAllowed",
}

def error_response(status_code: int, kind: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=kind, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())

def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {first.get('msg')}" if location else str(first.get("msg"))

def register_exception_handlers(app: FastAPI):
    @app.exception_handler(BusinessLogicError)
    async def business_logic_error_handler(request: Request, exc: BusinessLogicError):
        logger.info(f"{request.method} {request.url.path} rejected: {exc.kind} - {exc}")
        return error_response(exc.status_code, exc.kind, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = _describe_validation_error(exc)
        logger.info(f"{request.method} {request.url.path} rejected: InvalidRequest - {message}")
        return error_response(400, "InvalidRequest", message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        kind = HTTP_STATUS_KINDS.get(exc.status_code, "Error")
        return error_response(exc.status_code, kind, str(exc.detail))
