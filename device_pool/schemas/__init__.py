"""Pydantic schemas used across the project."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from device_pool.modules.feedback import DEFAULT_RATING, MAX_RATING, MIN_RATING


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    account_id: str
    username: str


class AccountCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=6)
    email: Optional[str] = None


class AccountResponse(BaseModel):
    id: str
    username: str
    name: str
    email: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class DeviceCreate(BaseModel):
    model: str = Field(..., min_length=1, max_length=100)
    os: str = Field(..., min_length=1, max_length=100)
    manufacturer: str = Field(..., min_length=1, max_length=100)


class FeedbackCreate(BaseModel):
    rating: int = Field(DEFAULT_RATING, ge=MIN_RATING, le=MAX_RATING)
    text: Optional[str] = Field(None, max_length=2000)


class FeedbackResponse(BaseModel):
    id: int
    reviewer_id: str
    reviewer_name: str
    rating: int
    text: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DeviceResponse(BaseModel):
    id: str
    model: str
    os: str
    manufacturer: str
    registered_by: str
    registered_at: datetime
    is_checked_out: bool
    last_checked_out_by: Optional[str] = None
    last_checked_out_date: Optional[datetime] = None
    last_checked_in_date: Optional[datetime] = None
    feedbacks: list[FeedbackResponse] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    msg: str
