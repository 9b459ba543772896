# api/responses.py
from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success(data=None, status_code=status.HTTP_200_OK) -> JSONResponse:
    """Envelope for a handled request: ``{"success": true, "data": ...}``."""
    content = {"success": True}
    if data is not None:
        content["data"] = jsonable_encoder(data)
    return JSONResponse(status_code=status_code, content=content)


def error(message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, error_code=None, headers=None) -> JSONResponse:
    content = {"success": False, "message": message}
    if error_code:
        content["error"] = error_code
    return JSONResponse(status_code=status_code, content=content, headers=headers)
