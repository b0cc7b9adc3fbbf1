"""
Запуск REST API
"""
import logging
import uvicorn

from driveeasy.config import API_HOST, API_PORT, LOG_LEVEL
from driveeasy.core.logging_config import setup_logging
from driveeasy.api.app import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    setup_logging(LOG_LEVEL)
    logger.info(f"Backend server running at http://localhost:{API_PORT}")
    uvicorn.run(create_app(), host=API_HOST, port=API_PORT, log_level=LOG_LEVEL.lower())


if __name__ == '__main__':
    main()
