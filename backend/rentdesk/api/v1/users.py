"""Staff user endpoints."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import IntegrityError

from rentdesk.api.deps import SessionDep
from rentdesk.schemas.user import UserCreate, UserRead
from rentdesk.services import user_service

router = APIRouter()


@router.get("", response_model=list[UserRead], summary="List staff users")
async def list_users(
    session: SessionDep, skip: int = 0, limit: int = 50
) -> list[UserRead]:
    users = await user_service.list_users(session, skip=skip, limit=limit)
    return [UserRead.model_validate(user) for user in users]


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register staff user",
)
async def create_user(payload: UserCreate, session: SessionDep) -> UserRead:
    try:
        user = await user_service.create_user(session, payload)
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered"
        ) from exc
    return UserRead.model_validate(user)
