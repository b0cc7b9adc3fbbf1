"""
Pydantic модели для бронирований
"""
from datetime import date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class BookingStatus(str, Enum):
    """Статус бронирования"""
    PENDING = 'Pending'
    APPROVED = 'Approved'
    REJECTED = 'Rejected'
    COMPLETED = 'Completed'


class BookingCreate(BaseModel):
    """Модель для создания бронирования из формы"""
    user_id: int = Field(..., gt=0)
    car_id: int = Field(..., gt=0)
    pickup_date: date
    return_date: date
    total_price: int = Field(..., gt=0, description="Посчитана на стороне формы")
    status: BookingStatus = BookingStatus.PENDING
    has_driver: bool = False
    driver_id_proof: Optional[str] = None

    def to_record(self) -> dict:
        """Запись для хранилища: даты в ISO, пустые поля опускаются"""
        return self.model_dump(mode='json', exclude_none=True)


class DriverDetails(BaseModel):
    """Данные водителя, назначаемого при подтверждении"""
    name: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(..., min_length=1, max_length=30)
    id_proof: Optional[str] = None

    def to_fields(self) -> dict:
        """Поля бронирования driver_name / driver_phone / driver_id_proof"""
        fields = {'driver_name': self.name, 'driver_phone': self.phone}
        if self.id_proof:
            fields['driver_id_proof'] = self.id_proof
        return fields
