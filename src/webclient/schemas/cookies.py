"""Pydantic schema for persisted cookies.

A cookie file is a JSON array of CookieRecord objects.
"""

from datetime import datetime, timezone
from pydantic import BaseModel, TypeAdapter, field_validator
from typing import List, Optional

class CookieRecord(BaseModel):
    name: str
    value: str
    domain: str = ""  # empty: host-only cookie for the site URL
    path: str = ""  # empty: default path of the site URL
    expires: Optional[datetime] = None
    secure: bool = False
    http_only: bool = False

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("cookie name must not be empty")
        return v

    @field_validator("expires")
    @classmethod
    def expires_aware(cls, v: Optional[datetime]) -> Optional[datetime]:
        # naive timestamps are read as UTC
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

CookieFile = TypeAdapter(List[CookieRecord])
