"""
JSON envelopes for the /functions endpoints.

Every function answers {"success": true, ...} or {"success": false, "error": ...}.
"""
from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse


def success_response(**payload: Any) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_200_OK, content={"success": True, **payload})


def error_response(error: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error, **extra})
