"""
Unit тесты для admin handlers: форма автомобиля, документы, удаление, назначение водителя
"""
import pytest
from unittest.mock import AsyncMock, Mock, patch
from aiogram.fsm.context import FSMContext
from aiogram.fsm.storage.base import StorageKey
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.types import CallbackQuery

from driveeasy.database.repositories import BookingRepository, CarRepository
from driveeasy.handlers.admin import bookings as admin_bookings
from driveeasy.handlers.admin import cars as admin_cars
from driveeasy.handlers.admin.states import CarDocumentStates, CarFormStates, DriverAssignmentStates
from driveeasy.services.booking_service import BookingService
from driveeasy.services.car_service import CarService


@pytest.fixture
def state():
    """Настоящий FSMContext в памяти"""
    return FSMContext(storage=MemoryStorage(), key=StorageKey(bot_id=1, chat_id=123456789, user_id=123456789))


@pytest.fixture
def fleet_store(seeded_store):
    """Handlers автопарка работают с временным хранилищем"""
    with patch.object(admin_cars, 'car_service', CarService(CarRepository(seeded_store))):
        yield seeded_store


@pytest.fixture
def booking_store(seeded_store):
    """Handlers заявок работают с временным хранилищем"""
    with patch.object(admin_bookings, 'booking_service', BookingService(BookingRepository(seeded_store))):
        yield seeded_store


async def _car(store, car_id):
    data = await store.load()
    return next((c for c in data['cars'] if c['id'] == car_id), None)


async def _booking(store, booking_id):
    data = await store.load()
    return next(b for b in data['bookings'] if b['id'] == booking_id)


async def _add_driver_booking(store) -> int:
    data = await store.load()
    data['bookings'].append({
        'id': 2,
        'user_id': 2,
        'car_id': 3,
        'pickup_date': '2024-07-01',
        'return_date': '2024-07-03',
        'total_price': 18000,
        'status': 'Pending',
        'has_driver': True,
    })
    await store.save(data)
    return 2


class TestCarForm:
    """Тесты формы добавления и редактирования автомобиля"""

    @pytest.mark.asyncio
    async def test_add_car_full_flow(self, fleet_store, mock_message, mock_callback_query, state, admin_session):
        await admin_cars.handle_admin_add_car_callback(mock_callback_query, admin_session, state)
        assert await state.get_state() == CarFormStates.waiting_for_name.state

        mock_message.text = 'Creta'
        await admin_cars.handle_car_text_input(mock_message, admin_session, state)
        assert await state.get_state() == CarFormStates.waiting_for_brand.state

        mock_message.text = 'Hyundai'
        await admin_cars.handle_car_text_input(mock_message, admin_session, state)
        assert await state.get_state() == CarFormStates.waiting_for_price.state

        mock_message.text = '2 500'
        await admin_cars.handle_car_price_input(mock_message, admin_session, state)
        assert await state.get_state() == CarFormStates.waiting_for_fuel_type.state

        mock_callback_query.data = 'car_fuel:Petrol'
        await admin_cars.handle_car_fuel_callback(mock_callback_query, admin_session, state)
        assert await state.get_state() == CarFormStates.waiting_for_image.state

        mock_message.text = 'https://example.com/creta.jpg'
        await admin_cars.handle_car_image_input(mock_message, admin_session, state)

        assert await state.get_state() is None
        car = await _car(fleet_store, 4)
        assert car == {
            'id': 4,
            'name': 'Creta',
            'brand': 'Hyundai',
            'price_per_day': 2500,
            'fuel_type': 'Petrol',
            'image': 'https://example.com/creta.jpg',
            'availability': True,
        }
        assert any("добавлен" in c[0][0] for c in mock_message.answer.call_args_list)

    @pytest.mark.asyncio
    async def test_image_required(self, fleet_store, mock_message, state, admin_session):
        await state.set_state(CarFormStates.waiting_for_image)
        await state.update_data(
            car_form={'name': 'Creta', 'brand': 'Hyundai', 'price_per_day': 2500, 'fuel_type': 'Petrol'},
            editing=False
        )
        mock_message.text = 'без картинки'

        await admin_cars.handle_car_image_input(mock_message, admin_session, state)

        assert await state.get_state() == CarFormStates.waiting_for_image.state
        assert "Изображение обязательно" in mock_message.answer.call_args[0][0]
        assert len((await fleet_store.load())['cars']) == 3

    @pytest.mark.asyncio
    async def test_image_as_photo(self, fleet_store, mock_message, state, admin_session):
        await state.set_state(CarFormStates.waiting_for_image)
        await state.update_data(
            car_form={'name': 'Creta', 'brand': 'Hyundai', 'price_per_day': 2500, 'fuel_type': 'Petrol'},
            editing=False
        )
        mock_message.text = None
        mock_message.photo = [Mock(file_id='small'), Mock(file_id='PHOTO_BIG')]

        await admin_cars.handle_car_image_input(mock_message, admin_session, state)

        assert (await _car(fleet_store, 4))['image'] == 'PHOTO_BIG'

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["abc", "0", "-100"])
    async def test_invalid_price(self, fleet_store, mock_message, state, admin_session, text):
        await state.set_state(CarFormStates.waiting_for_price)
        await state.update_data(car_form={'name': 'Creta', 'brand': 'Hyundai'}, editing=False)
        mock_message.text = text

        await admin_cars.handle_car_price_input(mock_message, admin_session, state)

        assert await state.get_state() == CarFormStates.waiting_for_price.state
        assert 'price_per_day' not in (await state.get_data())['car_form']

    @pytest.mark.asyncio
    async def test_empty_name(self, fleet_store, mock_message, state, admin_session):
        await state.set_state(CarFormStates.waiting_for_name)
        await state.update_data(car_form={}, editing=False)
        mock_message.text = '   '

        await admin_cars.handle_car_text_input(mock_message, admin_session, state)

        assert await state.get_state() == CarFormStates.waiting_for_name.state

    @pytest.mark.asyncio
    async def test_edit_keeps_current_values(self, fleet_store, mock_message, mock_callback_query, state, admin_session):
        mock_callback_query.data = 'admin_edit_car:1'
        await admin_cars.handle_admin_edit_car_callback(mock_callback_query, admin_session, state)
        assert await state.get_state() == CarFormStates.waiting_for_name.state
        # Текущее значение показывается в подсказке
        assert "Scorpio-N" in mock_callback_query.message.answer.call_args[0][0]

        mock_callback_query.data = 'car_form_keep'
        await admin_cars.handle_car_form_keep_callback(mock_callback_query, admin_session, state)
        await admin_cars.handle_car_form_keep_callback(mock_callback_query, admin_session, state)
        assert await state.get_state() == CarFormStates.waiting_for_price.state

        mock_message.text = '5000'
        await admin_cars.handle_car_price_input(mock_message, admin_session, state)
        await admin_cars.handle_car_form_keep_callback(mock_callback_query, admin_session, state)
        assert await state.get_state() == CarFormStates.waiting_for_image.state
        await admin_cars.handle_car_form_keep_callback(mock_callback_query, admin_session, state)

        assert await state.get_state() is None
        car = await _car(fleet_store, 1)
        assert car['price_per_day'] == 5000
        assert car['name'] == 'Scorpio-N'
        assert car['brand'] == 'Mahindra'
        assert car['fuel_type'] == 'Diesel'
        assert car['image'].startswith('https://images.unsplash.com/')
        assert len((await fleet_store.load())['cars']) == 3

    @pytest.mark.asyncio
    async def test_keep_after_form_closed(self, fleet_store, mock_callback_query, state, admin_session):
        await admin_cars.handle_car_form_keep_callback(mock_callback_query, admin_session, state)

        assert mock_callback_query.answer.call_args.kwargs['text'] == "Форма уже закрыта"


class TestFleetActions:
    """Тесты действий с автомобилем"""

    @pytest.mark.asyncio
    async def test_toggle_availability(self, fleet_store, mock_callback_query, admin_session):
        mock_callback_query.data = 'admin_toggle_car:1'

        await admin_cars.handle_admin_toggle_car_callback(mock_callback_query, admin_session)

        assert (await _car(fleet_store, 1))['availability'] is False
        assert mock_callback_query.answer.call_args.kwargs['text'] == "Автомобиль снят с аренды"

        await admin_cars.handle_admin_toggle_car_callback(mock_callback_query, admin_session)

        assert (await _car(fleet_store, 1))['availability'] is True

    @pytest.mark.asyncio
    async def test_toggle_blocked_for_user(self, fleet_store, mock_callback_query, user_session):
        mock_callback_query.data = 'admin_toggle_car:1'

        await admin_cars.handle_admin_toggle_car_callback(mock_callback_query, user_session)

        assert (await _car(fleet_store, 1))['availability'] is True

    @pytest.mark.asyncio
    async def test_document_upload(self, fleet_store, mock_message, mock_callback_query, state, admin_session):
        mock_callback_query.data = 'admin_car_doc:2:rc_doc'
        await admin_cars.handle_admin_car_doc_callback(mock_callback_query, admin_session, state)
        assert await state.get_state() == CarDocumentStates.waiting_for_document.state

        mock_message.document = Mock(file_id='RC_FILE')
        await admin_cars.handle_car_document_input(mock_message, admin_session, state)

        assert await state.get_state() is None
        car = await _car(fleet_store, 2)
        assert car['rc_doc'] == 'RC_FILE'
        assert car['name'] == 'Thar Rooftop'

    @pytest.mark.asyncio
    async def test_document_without_file(self, fleet_store, mock_message, state, admin_session):
        await state.set_state(CarDocumentStates.waiting_for_document)
        await state.update_data(doc_car_id=2, doc_field='insurance_doc')

        await admin_cars.handle_car_document_input(mock_message, admin_session, state)

        assert await state.get_state() == CarDocumentStates.waiting_for_document.state
        assert 'insurance_doc' not in await _car(fleet_store, 2)

    @pytest.mark.asyncio
    async def test_delete_requires_confirmation(self, fleet_store, mock_callback_query, admin_session):
        mock_callback_query.data = 'admin_delete_car:3'
        await admin_cars.handle_admin_delete_car_callback(mock_callback_query, admin_session)

        assert await _car(fleet_store, 3) is not None
        assert "Удалить" in mock_callback_query.message.edit_text.call_args[0][0]

        mock_callback_query.data = 'admin_confirm_delete_car:3'
        await admin_cars.handle_admin_confirm_delete_car_callback(mock_callback_query, admin_session)

        data = await fleet_store.load()
        assert await _car(fleet_store, 3) is None
        assert len(data['bookings']) == 1


class TestBookingActions:
    """Тесты смены статуса заявки и назначения водителя"""

    @pytest.mark.asyncio
    async def test_approve_without_driver(self, booking_store, mock_callback_query, state, admin_session):
        mock_callback_query.data = 'admin_approve:1'

        await admin_bookings.handle_admin_approve_callback(mock_callback_query, admin_session, state)

        assert (await _booking(booking_store, 1))['status'] == 'Approved'
        assert await state.get_state() is None
        assert mock_callback_query.answer.call_args.kwargs['text'] == "Заявка подтверждена"

    @pytest.mark.asyncio
    async def test_driver_assignment_skip_id(
        self, booking_store, mock_message, mock_callback_query, state, admin_session
    ):
        booking_id = await _add_driver_booking(booking_store)
        mock_callback_query.data = f'admin_approve:{booking_id}'

        await admin_bookings.handle_admin_approve_callback(mock_callback_query, admin_session, state)

        # Без данных водителя заявка не подтверждается
        assert await state.get_state() == DriverAssignmentStates.waiting_for_name.state
        assert (await _booking(booking_store, booking_id))['status'] == 'Pending'

        mock_message.text = 'Ravi'
        await admin_bookings.handle_driver_name_input(mock_message, admin_session, state)
        assert await state.get_state() == DriverAssignmentStates.waiting_for_phone.state

        mock_message.text = '9000000000'
        await admin_bookings.handle_driver_phone_input(mock_message, admin_session, state)
        assert await state.get_state() == DriverAssignmentStates.waiting_for_id_proof.state

        mock_callback_query.data = 'driver_skip_id'
        await admin_bookings.handle_driver_skip_id_callback(mock_callback_query, admin_session, state)

        booking = await _booking(booking_store, booking_id)
        assert booking['status'] == 'Approved'
        assert booking['driver_name'] == 'Ravi'
        assert booking['driver_phone'] == '9000000000'
        assert 'driver_id_proof' not in booking
        assert await state.get_state() is None

    @pytest.mark.asyncio
    async def test_driver_assignment_with_id_proof(self, booking_store, mock_message, state, admin_session):
        booking_id = await _add_driver_booking(booking_store)
        await state.set_state(DriverAssignmentStates.waiting_for_id_proof)
        await state.update_data(approve_booking_id=booking_id, driver_name='Ravi', driver_phone='9000000000')
        mock_message.photo = [Mock(file_id='small'), Mock(file_id='DRIVER_ID')]

        await admin_bookings.handle_driver_id_proof_input(mock_message, admin_session, state)

        booking = await _booking(booking_store, booking_id)
        assert booking['status'] == 'Approved'
        assert booking['driver_id_proof'] == 'DRIVER_ID'

    @pytest.mark.asyncio
    async def test_empty_driver_name(self, booking_store, mock_message, state, admin_session):
        await state.set_state(DriverAssignmentStates.waiting_for_name)
        await state.update_data(approve_booking_id=1)
        mock_message.text = ''

        await admin_bookings.handle_driver_name_input(mock_message, admin_session, state)

        assert await state.get_state() == DriverAssignmentStates.waiting_for_name.state

    @pytest.mark.asyncio
    async def test_reject_pending(self, booking_store, mock_callback_query, admin_session):
        mock_callback_query.data = 'admin_reject:1'

        await admin_bookings.handle_admin_reject_callback(mock_callback_query, admin_session)

        assert (await _booking(booking_store, 1))['status'] == 'Rejected'

    @pytest.mark.asyncio
    async def test_forbidden_transition_refused(self, booking_store, admin_session):
        """Pending нельзя сразу завершить: статус не меняется, администратор видит alert"""
        callback = Mock(spec=CallbackQuery)
        callback.data = 'admin_complete:1'
        callback.message = Mock()
        callback.message.answer = AsyncMock()
        callback.message.delete = AsyncMock()
        callback.answer = AsyncMock()

        await admin_bookings.handle_admin_complete_callback(callback, admin_session)

        assert (await _booking(booking_store, 1))['status'] == 'Pending'
        assert callback.answer.call_args.kwargs['show_alert'] is True
        assert "Нельзя перевести" in callback.answer.call_args.kwargs['text']
