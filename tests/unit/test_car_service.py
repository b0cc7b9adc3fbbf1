"""
Unit тесты для модуля car_service.py
"""
import pytest
from unittest.mock import AsyncMock, Mock
from driveeasy.database.repositories.car_repository import CarRepository
from driveeasy.services.car_service import CarService
from driveeasy.utils.errors import DatabaseError, NotFoundError, ValidationError


class TestCarService:
    """Тесты для класса CarService"""

    @pytest.fixture
    def fleet(self):
        return [
            {'id': 1, 'name': 'Scorpio-N', 'brand': 'Mahindra', 'fuel_type': 'Diesel', 'availability': True},
            {'id': 2, 'name': 'Thar', 'brand': 'Mahindra', 'fuel_type': 'Petrol', 'availability': False},
            {'id': 3, 'name': 'Fortuner', 'brand': 'Toyota', 'fuel_type': 'Diesel', 'availability': True},
        ]

    @pytest.fixture
    def mock_repository(self, fleet):
        """Создает мок репозитория"""
        repo = Mock(spec=CarRepository)
        repo.get_all = AsyncMock(return_value=fleet)
        repo.get_by_id = AsyncMock(return_value=None)
        repo.upsert = AsyncMock(side_effect=lambda car: {'id': car.get('id') or 10, **car})
        repo.delete = AsyncMock(return_value=True)
        return repo

    @pytest.fixture
    def car_service(self, mock_repository):
        """Создает экземпляр CarService с мок репозиторием"""
        return CarService(mock_repository)

    @pytest.fixture
    def car_form(self):
        return {
            'name': 'Creta',
            'brand': 'Hyundai',
            'price_per_day': 3000,
            'fuel_type': 'Petrol',
            'image': 'https://example.com/creta.jpg',
        }

    @pytest.mark.asyncio
    async def test_get_all_cars_includes_unavailable(self, car_service, fleet):
        assert await car_service.get_all_cars() == fleet

    @pytest.mark.asyncio
    async def test_catalog_only_available(self, car_service):
        """Каталог показывает только доступные автомобили"""
        cars = await car_service.get_catalog()

        assert [c['id'] for c in cars] == [1, 3]

    @pytest.mark.asyncio
    async def test_catalog_filter_brand_case_insensitive(self, car_service):
        cars = await car_service.get_catalog(brand='mahindra')

        assert [c['id'] for c in cars] == [1]

    @pytest.mark.asyncio
    async def test_catalog_filter_brand_and_fuel(self, car_service):
        cars = await car_service.get_catalog(brand='Toyota', fuel_type='DIESEL')

        assert [c['id'] for c in cars] == [3]

    @pytest.mark.asyncio
    async def test_catalog_filter_no_match(self, car_service):
        assert await car_service.get_catalog(fuel_type='Electric') == []

    @pytest.mark.asyncio
    async def test_filter_options_distinct(self, car_service):
        brands, fuels = await car_service.get_filter_options()

        assert brands == ['Mahindra', 'Toyota']
        assert fuels == ['Diesel', 'Petrol']

    @pytest.mark.asyncio
    async def test_get_car_by_id(self, car_service, mock_repository, fleet):
        """Тест получения автомобиля по ID"""
        mock_repository.get_by_id.return_value = fleet[0]

        assert await car_service.get_car_by_id(1) == fleet[0]
        mock_repository.get_by_id.assert_called_once_with(1)

    @pytest.mark.asyncio
    async def test_get_car_by_id_not_found(self, car_service):
        """Тест получения несуществующего автомобиля"""
        with pytest.raises(NotFoundError):
            await car_service.get_car_by_id(999)

    @pytest.mark.asyncio
    async def test_save_new_car(self, car_service, mock_repository, car_form):
        """Новый автомобиль сохраняется без id и доступным по умолчанию"""
        saved = await car_service.save_car(car_form)

        record = mock_repository.upsert.call_args[0][0]
        assert 'id' not in record
        assert record['availability'] is True
        assert saved['id'] == 10

    @pytest.mark.asyncio
    async def test_save_car_strips_text(self, car_service, mock_repository, car_form):
        car_form['name'] = '  Creta  '

        await car_service.save_car(car_form)

        assert mock_repository.upsert.call_args[0][0]['name'] == 'Creta'

    @pytest.mark.asyncio
    async def test_save_car_requires_image(self, car_service, mock_repository, car_form):
        """Без изображения автомобиль не сохраняется"""
        del car_form['image']

        with pytest.raises(ValidationError):
            await car_service.save_car(car_form)
        mock_repository.upsert.assert_not_called()

    @pytest.mark.asyncio
    async def test_save_car_rejects_non_positive_price(self, car_service, car_form):
        car_form['price_per_day'] = 0

        with pytest.raises(ValidationError):
            await car_service.save_car(car_form)

    @pytest.mark.asyncio
    async def test_save_existing_car_keeps_id(self, car_service, mock_repository, car_form):
        car_form['id'] = 3

        await car_service.save_car(car_form)

        assert mock_repository.upsert.call_args[0][0]['id'] == 3

    @pytest.mark.asyncio
    async def test_set_availability(self, car_service, mock_repository, fleet):
        mock_repository.get_by_id.return_value = fleet[0]

        updated = await car_service.set_availability(1, False)

        assert updated['availability'] is False
        assert updated['name'] == 'Scorpio-N'

    @pytest.mark.asyncio
    async def test_attach_document(self, car_service, mock_repository, fleet):
        mock_repository.get_by_id.return_value = fleet[0]

        updated = await car_service.attach_document(1, 'rc_doc', 'file-id-1')

        assert updated['rc_doc'] == 'file-id-1'

    @pytest.mark.asyncio
    async def test_attach_unknown_document(self, car_service, mock_repository):
        with pytest.raises(ValidationError):
            await car_service.attach_document(1, 'passport', 'file-id-1')
        mock_repository.upsert.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_car(self, car_service, mock_repository, fleet):
        mock_repository.get_by_id.return_value = fleet[1]

        assert await car_service.delete_car(2) is True
        mock_repository.delete.assert_called_once_with(2)

    @pytest.mark.asyncio
    async def test_delete_missing_car(self, car_service, mock_repository):
        with pytest.raises(NotFoundError):
            await car_service.delete_car(999)
        mock_repository.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_not_removed(self, car_service, mock_repository, fleet):
        mock_repository.get_by_id.return_value = fleet[0]
        mock_repository.delete.return_value = False

        with pytest.raises(DatabaseError):
            await car_service.delete_car(1)

    def test_merge_for_edit(self):
        merged = CarService.merge_for_edit({'id': 1, 'name': 'Old', 'brand': 'X'}, {'name': 'New'})

        assert merged == {'id': 1, 'name': 'New', 'brand': 'X'}

    def test_merge_for_new(self):
        assert CarService.merge_for_edit(None, {'name': 'New'}) == {'name': 'New'}
