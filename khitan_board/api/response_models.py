"""
Pydantic response schemas for the API.
"""
from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    state: str
    registered: int
    refreshing: bool


class RegistrantOut(BaseModel):
    sequence_number: int
    name: str
    birth_info: str
    father_name: str
    mother_name: str
    phone: str
    address: str


class StatusResponse(BaseModel):
    state: str                      # loading | success | error
    loading: bool
    error: Optional[str] = None
    last_updated: Optional[dt.datetime] = None
    registered: int
    quota: int
    quota_remaining: int
    can_export: bool


class RegistrantsResponse(BaseModel):
    registrants: list[RegistrantOut]
    count: int
    last_updated: Optional[dt.datetime] = None
