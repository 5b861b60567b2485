"""
JSON envelope shared by every endpoint.

Success: {"status": "success", "data": ..., "jobId": "..."}
Error:   {"status": "error", "message": "...", "jobId": "..."}

Both paths write the request/response pair to the audit log.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from core import applog

JOB_ID_HEADER = "JobID"


class ApiError(Exception):
    """
    Domain failure with a user-facing message.

    `detail` is written to the audit log only.
    """

    def __init__(self, status_code: int, message: str, *, detail: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.detail = detail


def job_id(request: Request) -> str:
    return str(getattr(request.state, "job_id", "") or "")


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client is not None else None


def _build_request_log(request: Request, body: Any = b"") -> dict[str, Any]:
    return applog.build_request_log(
        method=request.method,
        url=str(request.url),
        headers=dict(request.headers),
        client_ip=_client_ip(request),
        body=body,
    )


async def capture_request(request: Request) -> None:
    """
    Router dependency: snapshot the request (with body) for the audit log.

    `request.state` lives in the ASGI scope, so exception handlers see it too.
    """
    body = await request.body()
    request.state.request_log = _build_request_log(request, body)


def request_log(request: Request, *, body: Any = b"") -> dict[str, Any]:
    captured = getattr(request.state, "request_log", None)
    if captured is not None:
        return captured
    return _build_request_log(request, body)


def success(request: Request, data: Any) -> dict[str, Any]:
    payload = jsonable_encoder(data)
    applog.log_request_response(request_log(request), applog.response_success(payload))
    return {"status": "success", "data": payload, "jobId": job_id(request)}


def error_response(
    request: Request,
    status_code: int,
    message: str,
    *,
    detail: str | None = None,
    body: Any = b"",
) -> JSONResponse:
    applog.log_request_response(request_log(request, body=body), applog.response_error(message, detail))
    current_job = job_id(request)
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message, "jobId": current_job},
        # Set here too: the catch-all handler runs outside the job id middleware.
        headers={JOB_ID_HEADER: current_job},
    )
