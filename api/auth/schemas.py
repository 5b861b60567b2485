"""
Auth API schemas (request models).
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    userid: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)
