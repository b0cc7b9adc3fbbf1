"""
Вспомогательные функции для работы с ботом
"""
from datetime import date, datetime
from typing import Optional
from aiogram.types import CallbackQuery, Message
from aiogram.exceptions import TelegramBadRequest
import logging

logger = logging.getLogger(__name__)

DATE_INPUT_FORMATS = ("%Y-%m-%d", "%d.%m.%Y")


async def safe_callback_answer(callback: CallbackQuery, text: str = None, show_alert: bool = False):
    """Безопасный ответ на callback query с обработкой ошибок"""
    try:
        await callback.answer(text=text, show_alert=show_alert)
    except TelegramBadRequest as e:
        error_str = str(e).lower()
        # Игнорируем ошибки "query is too old" и "query id is invalid" - это нормально для старых запросов
        if any(keyword in error_str for keyword in ["too old", "timeout", "invalid", "query id"]):
            logger.debug(f"Ignoring old/invalid callback query: {e}")
        else:
            logger.warning(f"Error answering callback: {e}")
    except Exception as e:
        logger.warning(f"Unexpected error answering callback: {e}")


async def safe_delete_message(message: Message) -> None:
    """Удаляет сообщение, игнорируя ошибки (сообщение уже удалено или слишком старое)"""
    try:
        await message.delete()
    except TelegramBadRequest as e:
        logger.debug(f"Не удалось удалить сообщение: {e}")


def parse_callback_id(data: str) -> int:
    """Извлекает числовой ID из callback_data вида 'prefix:123'"""
    return int(data.split(':')[-1])


def parse_date_input(text: Optional[str]) -> Optional[date]:
    """
    Парсит дату, введенную пользователем.

    Поддерживаются форматы ГГГГ-ММ-ДД и ДД.ММ.ГГГГ.
    Возвращает None, если дату не удалось распознать.
    """
    if not text:
        return None

    text = text.strip()
    for fmt in DATE_INPUT_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def extract_file_id(message: Message) -> Optional[str]:
    """Возвращает file_id фото или документа из сообщения"""
    if message.photo:
        return message.photo[-1].file_id
    if message.document:
        return message.document.file_id
    return None


async def send_file_ref(message: Message, file_ref: str, caption: Optional[str] = None) -> None:
    """
    Отправляет сохраненный файл: URL или file_id изображения отправляется как фото,
    остальные file_id - как документ
    """
    if file_ref.startswith(('http://', 'https://')):
        await message.answer_photo(photo=file_ref, caption=caption)
        return

    try:
        await message.answer_document(document=file_ref, caption=caption)
    except TelegramBadRequest:
        # file_id фотографии нельзя отправить как документ
        await message.answer_photo(photo=file_ref, caption=caption)
