"""Pydantic schemas for API request/response validation."""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime, date


# ============== Auth Schemas ==============

class SignupRequest(BaseModel):
    name: str
    email: str
    password: str


class SigninRequest(BaseModel):
    email: str
    password: str


class FederatedSigninRequest(BaseModel):
    email: str
    name: Optional[str] = None
    id_token: Optional[str] = Field(None, alias="idToken")

    class Config:
        populate_by_name = True


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


# ============== Daily Steps Schemas ==============

class StepsCreate(BaseModel):
    steps: int = Field(..., ge=0)
    # ISO timestamp, or YYYY-MM-DD for a reporting-timezone calendar date
    day: Optional[str] = Field(None, alias="date")
    source: Optional[str] = None

    class Config:
        populate_by_name = True


class StepsResponse(BaseModel):
    id: Optional[int] = None
    day: datetime
    steps: int = Field(validation_alias="step_count")
    source: Optional[str] = None
    synced_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        populate_by_name = True


class StepsSummary(BaseModel):
    period_days: int
    days_recorded: int
    total_steps: int
    average_steps: float
    best_day: Optional[date] = None
    best_steps: int


# ============== Workout Schemas ==============

class WorkoutCreate(BaseModel):
    workout_type: str
    start_time: str  # ISO-8601, parsed by WorkoutService
    duration_seconds: float
    calories: float
    met: Optional[float] = None


class WorkoutResponse(BaseModel):
    id: int
    workout_type: str
    start_time: datetime
    duration_seconds: int
    calories: float
    met: Optional[float] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ============== Community Schemas ==============

class CommunityCreate(BaseModel):
    name: str
    is_public: bool = Field(True, alias="isPublic")

    class Config:
        populate_by_name = True


class JoinWithCodeRequest(BaseModel):
    join_code: str = Field(..., alias="joinCode")

    class Config:
        populate_by_name = True


class LeaveRequest(BaseModel):
    community_id: int = Field(..., alias="communityId")

    class Config:
        populate_by_name = True


class TransferOwnershipRequest(BaseModel):
    community_id: int = Field(..., alias="communityId")
    new_owner_id: int = Field(..., alias="newOwnerId")

    class Config:
        populate_by_name = True


class CommunityMemberResponse(BaseModel):
    user_id: int
    user_name: Optional[str] = None
    joined_at: Optional[datetime] = None


class CommunityResponse(BaseModel):
    """Community as seen by the requesting user."""
    id: int
    name: str
    is_public: bool
    owner_id: int
    owner_name: Optional[str] = None
    member_count: int
    is_owner: bool
    is_member: bool
    join_code: Optional[str] = None  # Owner of a private community only
    members: List[CommunityMemberResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ============== Message Schemas ==============

class MessageCreate(BaseModel):
    community_id: int = Field(..., alias="communityId")
    message: str

    class Config:
        populate_by_name = True


class MessageResponse(BaseModel):
    id: int
    community_id: int
    user_id: int
    user_name: Optional[str] = None
    message: str = Field(validation_alias="body")
    created_at: datetime

    class Config:
        from_attributes = True
        populate_by_name = True


class StatusResponse(BaseModel):
    success: bool = True
    message: str
