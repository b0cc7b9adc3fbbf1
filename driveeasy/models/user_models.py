"""
Pydantic модели для пользователей и сессии
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

# Токен-заглушка: настоящей проверки токена в системе нет
MOCK_TOKEN = 'mock-jwt-token'


class UserRole(str, Enum):
    """Роль пользователя"""
    USER = 'user'
    ADMIN = 'admin'


class UserRegister(BaseModel):
    """Модель регистрации пользователя. Политики пароля нет"""
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=1, max_length=200, description="Используется для входа")
    phone: str = Field(..., min_length=1, max_length=30)
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Модель ответа с информацией о пользователе"""
    model_config = ConfigDict(extra='allow')

    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    role: str = UserRole.USER.value
    password: Optional[str] = None


class AuthState(BaseModel):
    """Состояние сессии пользователя"""
    user: Optional[UserResponse] = None
    token: Optional[str] = None
    is_authenticated: bool = False

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self.user is not None and self.user.role == UserRole.ADMIN.value
