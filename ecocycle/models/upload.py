"""
Upload presigning schemas.

Dependencies: pydantic
System role: Presigned upload API contracts
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class PresignRequest(BaseModel):
    purpose: Literal["detections", "avatars"] = "detections"
    content_type: str = Field(..., description="Image MIME type")
    size: int = Field(..., gt=0, description="File size in bytes")


class PresignResponse(BaseModel):
    upload_url: str
    download_url: str
    key: str
    expires_at: datetime
