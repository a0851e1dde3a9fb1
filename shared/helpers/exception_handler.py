import logging
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)

# substrings of the constraint as reported by postgres / sqlite
UNIQUE_CONSTRAINT_MESSAGES = [
    (("uq_rooms_hotel_number", "rooms.hotel_id, rooms.number"),
     "Room number already exists in this hotel"),
    (("hotels_code", "hotels.code"), "Hotel code already exists"),
    (("guests_document", "guests.document"),
     "A guest with this document number already exists"),
    (("users_email", "users.email"), "Email already in use"),
    (("reservations_code", "reservations.code"),
     "Reservation code already exists, please retry"),
]


def unique_violation_message(exc: IntegrityError):
    text = str(exc.orig)
    for needles, message in UNIQUE_CONSTRAINT_MESSAGES:
        if any(needle in text for needle in needles):
            return message
    return None


def failure(message: str, status_code: str, http_status: int):
    wrapped = JsonOutResult(
        data=None,
        status="Failure",
        status_code=status_code,
        message=message
    ).model_dump()
    return JSONResponse(content=wrapped, status_code=http_status)


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        if isinstance(exc.detail, dict) and "message" in exc.detail:
            return JSONResponse(content=exc.detail, status_code=exc.status_code, headers=exc.headers)
        return failure(str(exc.detail), str(exc.status_code), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            field = ".".join(str(p) for p in first.get("loc", []) if p != "body")
            message = f"{field}: {first.get('msg')}" if field else first.get("msg")
        else:
            message = "Invalid input"
        return failure(message, AppStatusCode.INVALID_INPUT, 400)

    @app.exception_handler(IntegrityError)
    async def integrity_exception_handler(request: Request, exc: IntegrityError):
        message = unique_violation_message(exc)
        if message:
            return failure(message, AppStatusCode.DUPLICATE_ADD_ERROR, 400)
        logger.exception("Unhandled integrity error on %s %s",
                         request.method, request.url.path)
        return failure("Internal server error", AppStatusCode.OPERATION_FAILED, 500)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s",
                         request.method, request.url.path)
        return failure("Internal server error", AppStatusCode.OPERATION_FAILED, 500)
