"""Response Envelope — uniform JSON wrapper for every endpoint.

Invariants:
    - Success: {success: true, message, data, meta?}
    - Failure: {success: false, message, error?}
    - data is serialized in JSON mode with camelCase aliases
    - 204 carries no body
"""

from typing import Any

from fastapi import Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from catalog_api.schemas.common import PageMeta


def _serialize(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, list):
        return [_serialize(item) for item in data]
    return data


def build_envelope(
    success: bool,
    message: str,
    data: Any = None,
    error: str | None = None,
    meta: PageMeta | None = None,
) -> dict:
    body: dict[str, Any] = {"success": success, "message": message}
    if data is not None:
        body["data"] = _serialize(data)
    if error:
        body["error"] = error
    if meta is not None:
        body["meta"] = _serialize(meta)
    return body


def send_success(
    data: Any,
    message: str = "Success",
    status_code: int = status.HTTP_200_OK,
    meta: PageMeta | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=build_envelope(True, message, data=data, meta=meta),
    )


def send_created(data: Any, message: str = "Created successfully") -> JSONResponse:
    return send_success(data, message, status.HTTP_201_CREATED)


def send_no_content() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def send_error(
    message: str,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    error: str | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=build_envelope(False, message, error=error),
    )
