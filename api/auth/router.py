"""
User login endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from core import applog, envelope

from . import schemas, service

router = APIRouter(prefix="/user", dependencies=[Depends(envelope.capture_request)])


@router.post("/login")
async def login(request: Request, payload: schemas.LoginRequest) -> dict:
    token = await service.login(payload)
    # The token is returned to the caller but never written to the audit log.
    applog.log_request_response(envelope.request_log(request), {"status": "success"})
    return {"status": "success", "token": token, "jobId": envelope.job_id(request)}
