"""
Signup / login endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from core.config import Settings, get_settings

from . import dependencies, schemas, service
from .repository import UserRepository, get_user_repository

router = APIRouter(prefix="/auth")


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    request: schemas.SignupRequest,
    users: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_settings),
) -> schemas.MessageResponse:
    return await service.signup(request, users=users, settings=settings)


@router.post("/login")
async def login(
    request: schemas.LoginRequest,
    users: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_settings),
) -> schemas.LoginResponse:
    return await service.login(request, users=users, settings=settings)


@router.get("/me")
async def me(
    current_user: dict = Depends(dependencies.get_current_user),
) -> schemas.UserResponse:
    return service.me(current_user)
