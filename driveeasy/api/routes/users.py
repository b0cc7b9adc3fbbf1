"""
Маршруты пользователей
"""
from typing import Any, Dict, List
from fastapi import APIRouter, Body, Depends
from driveeasy.api.dependencies import get_user_repository
from driveeasy.database.repositories import UserRepository

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("")
async def list_users(repo: UserRepository = Depends(get_user_repository)) -> List[Dict[str, Any]]:
    return await repo.get_all()


@router.post("/register")
async def register_user(
    user: Dict[str, Any] = Body(...),
    repo: UserRepository = Depends(get_user_repository)
) -> Dict[str, Any]:
    return await repo.register(user)
