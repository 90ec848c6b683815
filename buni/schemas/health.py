"""Pydantic schemas for the health endpoints."""

from typing import Literal, Optional

from pydantic import BaseModel


class PingResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: Literal["ok", "degraded"]
    ledgerAvailable: bool
    deposits: Optional[int] = None
