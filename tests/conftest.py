"""
Конфигурация pytest и общие фикстуры
"""
import copy
import json
import os
from pathlib import Path
from unittest.mock import Mock, AsyncMock

import pytest

from driveeasy.database.seed import SAMPLE_CARS, SAMPLE_USERS
from driveeasy.database.store import JsonStore
from driveeasy.models.user_models import AuthState, UserResponse, MOCK_TOKEN


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Путь к временному файлу хранилища (файл не создается)"""
    return tmp_path / "test_db.json"


@pytest.fixture
def seeded_db_path(temp_db_path: Path, sample_booking_data) -> Path:
    """Файл хранилища с тестовыми автомобилями, пользователями и одним бронированием"""
    data = {
        'cars': copy.deepcopy(SAMPLE_CARS),
        'users': copy.deepcopy(SAMPLE_USERS),
        'bookings': [sample_booking_data],
    }
    temp_db_path.write_text(json.dumps(data, ensure_ascii=False), encoding='utf-8')
    return temp_db_path


@pytest.fixture
def empty_store(temp_db_path: Path) -> JsonStore:
    """Хранилище без файла"""
    return JsonStore(temp_db_path)


@pytest.fixture
def seeded_store(seeded_db_path: Path) -> JsonStore:
    """Хранилище с тестовыми данными"""
    return JsonStore(seeded_db_path)


@pytest.fixture
def mock_message():
    """Создает мок объект Message"""
    message = Mock()
    message.message_id = 1
    message.chat = Mock()
    message.chat.id = 123456789
    message.from_user = Mock()
    message.from_user.id = 123456789
    message.from_user.username = "test_user"
    message.from_user.first_name = "Test"
    message.text = "test message"
    message.photo = None
    message.document = None
    message.answer = AsyncMock()
    message.answer_photo = AsyncMock()
    message.answer_document = AsyncMock()
    message.delete = AsyncMock()
    message.edit_text = AsyncMock()
    return message


@pytest.fixture
def mock_callback_query():
    """Создает мок объект CallbackQuery"""
    callback = Mock()
    callback.data = "test_callback"
    callback.message = Mock()
    callback.message.message_id = 1
    callback.message.chat = Mock()
    callback.message.chat.id = 123456789
    callback.message.edit_text = AsyncMock()
    callback.message.delete = AsyncMock()
    callback.message.answer = AsyncMock()
    callback.message.answer_photo = AsyncMock()
    callback.message.answer_document = AsyncMock()
    callback.from_user = Mock()
    callback.from_user.id = 123456789
    callback.from_user.username = "test_user"
    callback.from_user.first_name = "Test"
    callback.answer = AsyncMock()
    return callback


@pytest.fixture
def sample_car_data():
    """Тестовые данные автомобиля"""
    return {
        'id': 1,
        'name': 'Scorpio-N',
        'brand': 'Mahindra',
        'price_per_day': 4500,
        'fuel_type': 'Diesel',
        'image': 'https://example.com/scorpio.jpg',
        'availability': True,
    }


@pytest.fixture
def sample_user_data():
    """Тестовые данные пользователя"""
    return {
        'id': 2,
        'name': 'Test User',
        'email': 'user@driveeasy.com',
        'phone': '9876543211',
        'role': 'user',
        'password': 'user123',
    }


@pytest.fixture
def sample_booking_data():
    """Тестовые данные бронирования"""
    return {
        'id': 1,
        'user_id': 2,
        'car_id': 1,
        'pickup_date': '2024-06-01',
        'return_date': '2024-06-04',
        'total_price': 13500,
        'status': 'Pending',
        'has_driver': False,
    }


@pytest.fixture
def user_session(sample_user_data) -> AuthState:
    """Сессия обычного пользователя"""
    return AuthState(
        user=UserResponse.model_validate(sample_user_data),
        token=MOCK_TOKEN,
        is_authenticated=True
    )


@pytest.fixture
def admin_session() -> AuthState:
    """Сессия администратора"""
    return AuthState(
        user=UserResponse(id=1, name='Admin User', email='admin@driveeasy.com', role='admin'),
        token=MOCK_TOKEN,
        is_authenticated=True
    )


@pytest.fixture(autouse=True)
def reset_env_vars(monkeypatch):
    """Сбрасывает переменные окружения перед каждым тестом"""
    for key in ['BOT_TOKEN', 'DB_FILE', 'API_HOST', 'API_PORT', 'ALLOW_ORIGINS',
                'DRIVER_DAILY_FEE', 'SEED_SAMPLE_DATA', 'LOG_LEVEL']:
        if key in os.environ:
            monkeypatch.delenv(key, raising=False)
    yield
