"""
Unit тесты для модуля helpers.py
"""
from datetime import date

import pytest
from unittest.mock import AsyncMock, Mock
from aiogram.exceptions import TelegramBadRequest
from driveeasy.utils.helpers import (
    extract_file_id,
    parse_callback_id,
    parse_date_input,
    safe_callback_answer,
    safe_delete_message,
    send_file_ref,
)


def _bad_request(text: str) -> TelegramBadRequest:
    return TelegramBadRequest(method=Mock(), message=text)


class TestSafeCallbackAnswer:
    """Тесты для функции safe_callback_answer"""

    @pytest.mark.asyncio
    async def test_successful_answer(self, mock_callback_query):
        """Тест успешного ответа на callback"""
        await safe_callback_answer(mock_callback_query, "Test message")

        mock_callback_query.answer.assert_called_once_with(text="Test message", show_alert=False)

    @pytest.mark.asyncio
    async def test_answer_with_alert(self, mock_callback_query):
        await safe_callback_answer(mock_callback_query, "Alert", show_alert=True)

        mock_callback_query.answer.assert_called_once_with(text="Alert", show_alert=True)

    @pytest.mark.asyncio
    async def test_old_query_ignored(self, mock_callback_query):
        """Ошибка устаревшего callback не пробрасывается"""
        mock_callback_query.answer.side_effect = _bad_request("query is too old")

        await safe_callback_answer(mock_callback_query, "Test")


class TestSafeDeleteMessage:
    """Тесты для функции safe_delete_message"""

    @pytest.mark.asyncio
    async def test_delete(self, mock_message):
        await safe_delete_message(mock_message)

        mock_message.delete.assert_called_once()

    @pytest.mark.asyncio
    async def test_already_deleted(self, mock_message):
        mock_message.delete.side_effect = _bad_request("message to delete not found")

        await safe_delete_message(mock_message)


class TestParseCallbackId:
    """Тесты для функции parse_callback_id"""

    def test_simple(self):
        assert parse_callback_id("car_details:15") == 15

    def test_last_segment(self):
        assert parse_callback_id("admin_bookings_page:3") == 3

    def test_not_a_number(self):
        with pytest.raises(ValueError):
            parse_callback_id("car_details:abc")


class TestParseDateInput:
    """Тесты для функции parse_date_input"""

    def test_iso_format(self):
        assert parse_date_input("2024-06-01") == date(2024, 6, 1)

    def test_dotted_format(self):
        assert parse_date_input(" 01.06.2024 ") == date(2024, 6, 1)

    def test_invalid(self):
        assert parse_date_input("завтра") is None

    def test_impossible_date(self):
        assert parse_date_input("2024-02-30") is None

    def test_empty(self):
        assert parse_date_input(None) is None
        assert parse_date_input("") is None


class TestExtractFileId:
    """Тесты для функции extract_file_id"""

    def test_largest_photo(self, mock_message):
        mock_message.photo = [Mock(file_id="small"), Mock(file_id="large")]

        assert extract_file_id(mock_message) == "large"

    def test_document(self, mock_message):
        mock_message.document = Mock(file_id="doc")

        assert extract_file_id(mock_message) == "doc"

    def test_text_only(self, mock_message):
        assert extract_file_id(mock_message) is None


class TestSendFileRef:
    """Тесты для функции send_file_ref"""

    @pytest.mark.asyncio
    async def test_url_sent_as_photo(self, mock_message):
        await send_file_ref(mock_message, "https://example.com/rc.jpg")

        mock_message.answer_photo.assert_called_once_with(photo="https://example.com/rc.jpg", caption=None)
        mock_message.answer_document.assert_not_called()

    @pytest.mark.asyncio
    async def test_file_id_sent_as_document(self, mock_message):
        await send_file_ref(mock_message, "BQACAgIAAxkBAAI", caption="RC")

        mock_message.answer_document.assert_called_once_with(document="BQACAgIAAxkBAAI", caption="RC")

    @pytest.mark.asyncio
    async def test_photo_file_id_fallback(self, mock_message):
        mock_message.answer_document = AsyncMock(side_effect=_bad_request("can't use file of type Photo as Document"))

        await send_file_ref(mock_message, "AgACAgIAAxkBAAI")

        mock_message.answer_photo.assert_called_once_with(photo="AgACAgIAAxkBAAI", caption=None)
