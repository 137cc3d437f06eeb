"""Communities API router: membership, ownership and chat."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from fittrack.database import get_db
from fittrack.models import User
from fittrack.routers.auth import get_current_user
from fittrack.schemas import (
    CommunityCreate,
    CommunityResponse,
    JoinWithCodeRequest,
    LeaveRequest,
    MessageCreate,
    MessageResponse,
    StatusResponse,
    TransferOwnershipRequest,
)
from fittrack.services.community_service import CommunityService
from fittrack.services.message_service import MessageService

router = APIRouter(prefix="/community", tags=["communities"])


@router.post("/create", response_model=CommunityResponse, status_code=201)
def create_community(
    community_data: CommunityCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Create a community; private ones get a join code."""
    service = CommunityService(db)
    community = service.create_community(user.id, community_data.name, community_data.is_public)
    return service.format_for_viewer(community, user.id)


@router.get("/list", response_model=List[CommunityResponse])
def list_public_communities(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """List public communities, newest first."""
    return CommunityService(db).list_public(user.id)


@router.get("/my-communities", response_model=List[CommunityResponse])
def list_my_communities(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Communities the user owns or has joined."""
    return CommunityService(db).list_mine(user.id)


@router.post("/join-with-code", response_model=CommunityResponse)
def join_with_code(
    payload: JoinWithCodeRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Join a private community by its code (case-insensitive)."""
    service = CommunityService(db)
    community = service.join_with_code(user.id, payload.join_code)
    return service.format_for_viewer(community, user.id)


@router.post("/{community_id}/join", response_model=CommunityResponse)
def join_public_community(
    community_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Join a public community."""
    service = CommunityService(db)
    community = service.join_public(user.id, community_id)
    return service.format_for_viewer(community, user.id)


@router.post("/leave", response_model=StatusResponse)
def leave_community(
    payload: LeaveRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Leave a community. Owners must transfer or delete instead."""
    CommunityService(db).leave(user.id, payload.community_id)
    return StatusResponse(message="Left community successfully")


@router.delete("/delete/{community_id}", response_model=StatusResponse)
def delete_community(
    community_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Delete a community and all its messages (owner only)."""
    CommunityService(db).delete(user.id, community_id)
    return StatusResponse(message="Community deleted successfully")


@router.post("/transfer-owner", response_model=StatusResponse)
def transfer_ownership(
    payload: TransferOwnershipRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Hand ownership to an existing member."""
    CommunityService(db).transfer_ownership(user.id, payload.community_id, payload.new_owner_id)
    return StatusResponse(message="Ownership transferred successfully")


# ============== Messages ==============

@router.post("/messages", response_model=MessageResponse, status_code=201)
def send_message(
    payload: MessageCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Post a message; members only."""
    message = MessageService(db).post_message(user.id, payload.community_id, payload.message)
    return MessageResponse.model_validate(message)


@router.get("/messages", response_model=List[MessageResponse])
def list_messages(
    community_id: int = Query(..., alias="communityId"),
    limit: int = Query(50),
    order: str = Query("asc"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Most recent messages of a community; members only."""
    messages = MessageService(db).list_messages(user.id, community_id, limit=limit, order=order)
    return [MessageResponse.model_validate(m) for m in messages]
