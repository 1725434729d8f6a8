"""
Users endpoint.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import List
from mdd_api.core.database import get_session
from mdd_api.models.user import User
from mdd_api.schemas.auth import MessageResponse, UpdateUserRequest, UserResponse
from mdd_api.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserResponse])
async def get_users(session: Session = Depends(get_session)):
    """List all users."""
    users = user_service.find_all_users(session).unwrap()
    return [UserResponse.model_validate(user) for user in users]


@router.get("/by-username/{username}", response_model=UserResponse)
async def get_user_by_username(username: str, session: Session = Depends(get_session)):
    """Get a user by username."""
    return UserResponse.model_validate(user_service.find_user_by_username(session, username).unwrap())


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, session: Session = Depends(get_session)):
    """Get a user by ID."""
    return UserResponse.model_validate(user_service.find_user_by_id(session, user_id).unwrap())


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    request: UpdateUserRequest,
    session: Session = Depends(get_session)
):
    """Replace a user's username, email and password.

    The request carries no post or comment associations, so the user keeps
    the ones already stored.
    """
    current = user_service.find_user_by_id(session, user_id).unwrap()
    incoming = User(
        id=user_id,
        username=request.username,
        email=request.email,
        password=User.hash_password(request.password),
        posts=list(current.posts),
        comments=list(current.comments),
    )
    return UserResponse.model_validate(user_service.update_user(session, incoming).unwrap())


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: int, session: Session = Depends(get_session)):
    """Delete a user by ID."""
    return MessageResponse(message=user_service.delete_user(session, user_id).unwrap())
