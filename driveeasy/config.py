"""
Конфигурация приложения.

Модуль загружает и валидирует конфигурационные параметры из переменных окружения
и .env файла. Общий для REST API и Telegram-бота.

Использование:
    from driveeasy.config import DB_FILE, API_PORT, DRIVER_DAILY_FEE
"""
import os
import logging
from pathlib import Path
from typing import List, Optional, Final
from dotenv import load_dotenv

# Настройка логирования для модуля конфигурации
logger = logging.getLogger(__name__)

# ============================================================================
# КОНСТАНТЫ
# ============================================================================

# Имена переменных окружения
ENV_BOT_TOKEN: Final[str] = 'BOT_TOKEN'
ENV_DB_FILE: Final[str] = 'DB_FILE'
ENV_API_HOST: Final[str] = 'API_HOST'
ENV_API_PORT: Final[str] = 'API_PORT'
ENV_ALLOW_ORIGINS: Final[str] = 'ALLOW_ORIGINS'
ENV_DRIVER_DAILY_FEE: Final[str] = 'DRIVER_DAILY_FEE'
ENV_SEED_SAMPLE_DATA: Final[str] = 'SEED_SAMPLE_DATA'
ENV_LOG_LEVEL: Final[str] = 'LOG_LEVEL'

# Значения по умолчанию
DEFAULT_DB_FILE: Final[str] = 'db.json'
DEFAULT_API_HOST: Final[str] = '0.0.0.0'
DEFAULT_API_PORT: Final[int] = 5000
DEFAULT_ALLOW_ORIGINS: Final[str] = '*'
DEFAULT_DRIVER_DAILY_FEE: Final[int] = 500
DEFAULT_LOG_LEVEL: Final[str] = 'INFO'

# Минимальная длина токена бота (примерная валидация)
MIN_BOT_TOKEN_LENGTH: Final[int] = 20

# Разделитель для списка CORS origins
ORIGINS_SEPARATOR: Final[str] = ','

TRUE_VALUES: Final[frozenset] = frozenset({'1', 'true', 'yes', 'on'})
FALSE_VALUES: Final[frozenset] = frozenset({'0', 'false', 'no', 'off'})

# ============================================================================
# ЗАГРУЗКА ПЕРЕМЕННЫХ ОКРУЖЕНИЯ
# ============================================================================

def _load_env_file() -> Path:
    """
    Загружает переменные окружения из .env файла.

    Returns:
        Path: Путь к файлу .env

    Note:
        Файл .env должен находиться в корне проекта (на уровень выше driveeasy/).
    """
    env_path = Path(__file__).parent.parent / '.env'

    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)
        logger.debug(f"Загружен .env файл: {env_path}")
    else:
        logger.debug(
            f"Файл .env не найден по пути: {env_path}. "
            "Используются только переменные окружения системы."
        )

    return env_path


# Загружаем .env файл при импорте модуля
_env_file_path = _load_env_file()

# ============================================================================
# ВАЛИДАЦИЯ И ПАРСИНГ
# ============================================================================

def _validate_bot_token(token: Optional[str]) -> str:
    """
    Валидирует токен бота.

    Args:
        token: Токен бота из переменной окружения

    Returns:
        str: Валидированный токен

    Raises:
        ValueError: Если токен отсутствует или невалиден
    """
    if not token or not token.strip():
        raise ValueError(
            f"{ENV_BOT_TOKEN} не установлен! "
            "Установите переменную окружения BOT_TOKEN или создайте файл .env "
            "на основе .env.example"
        )

    token = token.strip()

    if len(token) < MIN_BOT_TOKEN_LENGTH:
        raise ValueError(
            f"{ENV_BOT_TOKEN} слишком короткий. "
            f"Минимальная длина: {MIN_BOT_TOKEN_LENGTH} символов"
        )

    # Базовая проверка формата токена Telegram (обычно содержит двоеточие)
    if ':' not in token:
        logger.warning(
            f"{ENV_BOT_TOKEN} имеет необычный формат. "
            "Убедитесь, что токен корректен."
        )

    return token


def _validate_db_file(db_file: str) -> str:
    """
    Валидирует путь к JSON-файлу с данными.

    Args:
        db_file: Путь к файлу

    Returns:
        str: Валидированный путь (пустое значение заменяется значением по умолчанию)
    """
    db_file = db_file.strip()

    if not db_file:
        logger.warning(
            f"{ENV_DB_FILE} пуст. Используется значение по умолчанию: {DEFAULT_DB_FILE}"
        )
        return DEFAULT_DB_FILE

    if not db_file.endswith('.json'):
        logger.warning(f"{ENV_DB_FILE} не имеет расширения .json: {db_file}")

    return db_file


def _parse_port(port_str: Optional[str]) -> int:
    """Парсит порт REST API; некорректные значения заменяются портом по умолчанию"""
    if not port_str:
        return DEFAULT_API_PORT

    try:
        port = int(port_str.strip())
    except ValueError:
        logger.warning(
            f"{ENV_API_PORT} должен быть числом. Получено: {port_str}. "
            f"Используется {DEFAULT_API_PORT}"
        )
        return DEFAULT_API_PORT

    if not 0 < port < 65536:
        logger.warning(
            f"{ENV_API_PORT} вне диапазона 1-65535: {port}. "
            f"Используется {DEFAULT_API_PORT}"
        )
        return DEFAULT_API_PORT

    return port


def _parse_allow_origins(origins_str: Optional[str]) -> List[str]:
    """
    Парсит список разрешенных CORS origins.

    Args:
        origins_str: Строка с origins, разделенными запятыми

    Returns:
        List[str]: Список origins (['*'] если не указан)
    """
    if not origins_str or not origins_str.strip():
        return [DEFAULT_ALLOW_ORIGINS]

    origins = [
        origin.strip()
        for origin in origins_str.split(ORIGINS_SEPARATOR)
        if origin.strip()
    ]
    return origins or [DEFAULT_ALLOW_ORIGINS]


def _parse_driver_fee(fee_str: Optional[str]) -> int:
    """
    Парсит доплату за водителя в день.

    Note:
        Некорректные и отрицательные значения логируются как предупреждение,
        используется значение по умолчанию.
    """
    if not fee_str:
        return DEFAULT_DRIVER_DAILY_FEE

    try:
        fee = int(fee_str.strip())
    except ValueError:
        logger.warning(
            f"{ENV_DRIVER_DAILY_FEE} должен быть числом. Получено: {fee_str}"
        )
        return DEFAULT_DRIVER_DAILY_FEE

    if fee < 0:
        logger.warning(
            f"{ENV_DRIVER_DAILY_FEE} не может быть отрицательным. Получено: {fee}"
        )
        return DEFAULT_DRIVER_DAILY_FEE

    return fee


def _parse_bool(value: Optional[str], default: bool) -> bool:
    """Парсит булев флаг из переменной окружения"""
    if value is None or not value.strip():
        return default

    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False

    logger.warning(f"Некорректное булево значение: {value}. Используется {default}")
    return default


def _parse_log_level(level_str: Optional[str]) -> str:
    """Валидирует уровень логирования"""
    log_level = (level_str or DEFAULT_LOG_LEVEL).strip().upper()

    valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
    if log_level not in valid_log_levels:
        logger.warning(
            f"Некорректный уровень логирования: {log_level}. "
            f"Используется значение по умолчанию: {DEFAULT_LOG_LEVEL}"
        )
        return DEFAULT_LOG_LEVEL

    return log_level


# ============================================================================
# ЗАГРУЗКА КОНФИГУРАЦИИ
# ============================================================================

def _load_configuration() -> tuple:
    """
    Загружает и валидирует всю конфигурацию.

    Returns:
        tuple: (DB_FILE, API_HOST, API_PORT, ALLOW_ORIGINS, DRIVER_DAILY_FEE,
                SEED_SAMPLE_DATA, BOT_TOKEN, LOG_LEVEL)

    Note:
        BOT_TOKEN здесь не валидируется: REST API работает без него,
        проверка выполняется в get_bot_token() при создании бота.
    """
    db_file = _validate_db_file(os.getenv(ENV_DB_FILE, DEFAULT_DB_FILE))
    api_host = os.getenv(ENV_API_HOST, DEFAULT_API_HOST).strip() or DEFAULT_API_HOST
    api_port = _parse_port(os.getenv(ENV_API_PORT))
    allow_origins = _parse_allow_origins(os.getenv(ENV_ALLOW_ORIGINS))
    driver_daily_fee = _parse_driver_fee(os.getenv(ENV_DRIVER_DAILY_FEE))
    seed_sample_data = _parse_bool(os.getenv(ENV_SEED_SAMPLE_DATA), default=True)
    bot_token = os.getenv(ENV_BOT_TOKEN) or None
    log_level = _parse_log_level(os.getenv(ENV_LOG_LEVEL))

    return (
        db_file, api_host, api_port, allow_origins, driver_daily_fee,
        seed_sample_data, bot_token, log_level,
    )


def get_bot_token(token: Optional[str] = None) -> str:
    """
    Возвращает валидированный токен бота.

    Явно переданный токен имеет приоритет над BOT_TOKEN из окружения.

    Raises:
        ValueError: Если токен не задан или невалиден
    """
    return _validate_bot_token(token or BOT_TOKEN)


# Загружаем конфигурацию при импорте модуля
(
    DB_FILE,
    API_HOST,
    API_PORT,
    ALLOW_ORIGINS,
    DRIVER_DAILY_FEE,
    SEED_SAMPLE_DATA,
    BOT_TOKEN,
    LOG_LEVEL,
) = _load_configuration()

# ============================================================================
# ЭКСПОРТ ПУБЛИЧНОГО API
# ============================================================================

__all__ = [
    'DB_FILE',
    'API_HOST',
    'API_PORT',
    'ALLOW_ORIGINS',
    'DRIVER_DAILY_FEE',
    'SEED_SAMPLE_DATA',
    'BOT_TOKEN',
    'LOG_LEVEL',
    'get_bot_token',
]
