# shared/helpers/json_response_helper.py
from fastapi import HTTPException

from shared.utils.app_status_code import AppStatusCode
from shared.core.schemas import JsonOutResult


def error_response(message: str, status_code: str = AppStatusCode.OPERATION_FAILED, http_status: int = 400):
    """Raise an HTTPException whose detail is already the Failure envelope."""
    raise HTTPException(
        status_code=http_status,
        detail=JsonOutResult(
            data=None,
            status="Failure",
            status_code=status_code,
            message=message
        ).model_dump()
    )


def not_found(entity: str):
    return error_response(
        message=f"{entity} not found",
        status_code=str(AppStatusCode.NOT_FOUND),
        http_status=404
    )


def forbidden(message: str = "Forbidden"):
    return error_response(
        message=message,
        status_code=str(AppStatusCode.UNAUTHORIZED_ACTION),
        http_status=403
    )
