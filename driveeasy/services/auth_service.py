"""
Service для входа, регистрации и хранения сессий
"""
from typing import Dict
from driveeasy.database.repositories.user_repository import UserRepository
from driveeasy.models.user_models import AuthState, UserRegister, UserResponse, MOCK_TOKEN
from driveeasy.utils.errors import AuthError
import logging

logger = logging.getLogger(__name__)


class SessionStore:
    """Сессии пользователей бота в памяти процесса, по Telegram ID"""

    def __init__(self) -> None:
        self._sessions: Dict[int, AuthState] = {}

    def get(self, telegram_id: int) -> AuthState:
        """Текущая сессия или пустая, если пользователь не входил"""
        return self._sessions.get(telegram_id) or AuthState()

    def set(self, telegram_id: int, state: AuthState) -> None:
        self._sessions[telegram_id] = state

    def clear(self, telegram_id: int) -> None:
        self._sessions.pop(telegram_id, None)


class AuthService:
    """Service для аутентификации. Пароли хранятся и сравниваются открытым текстом"""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    @staticmethod
    def _authenticated(user: dict) -> AuthState:
        return AuthState(
            user=UserResponse.model_validate(user),
            token=MOCK_TOKEN,
            is_authenticated=True
        )

    async def login(self, email: str, password: str) -> AuthState:
        """
        Вход по email и паролю (точное совпадение с учетом регистра)

        Raises:
            AuthError: Если пользователь не найден
        """
        user = await self.user_repository.find_by_credentials(email, password)
        if not user:
            logger.info("Неудачная попытка входа")
            raise AuthError("Invalid credentials", "Неверный email или пароль")

        logger.info(f"Пользователь с ID {user['id']} вошел в систему")
        return self._authenticated(user)

    async def register(self, form: UserRegister) -> AuthState:
        """Регистрирует пользователя и сразу выполняет вход"""
        user = await self.user_repository.register(form.model_dump())
        return self._authenticated(user)

    @staticmethod
    def logout() -> AuthState:
        """Пустое состояние сессии"""
        return AuthState()


# Глобальное хранилище сессий бота
sessions = SessionStore()
