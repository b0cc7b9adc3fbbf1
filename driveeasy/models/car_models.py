"""
Pydantic модели для автомобилей
"""
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class CarForm(BaseModel):
    """Модель формы автомобиля в админ-консоли (создание и редактирование)"""
    id: Optional[int] = Field(None, description="ID автомобиля; отсутствует для нового")
    name: str = Field(..., min_length=1, max_length=200, description="Название автомобиля")
    brand: str = Field(..., min_length=1, max_length=100, description="Марка")
    price_per_day: int = Field(..., gt=0, le=1000000, description="Цена за день")
    fuel_type: str = Field(..., min_length=1, max_length=50, description="Тип топлива")
    image: str = Field(..., min_length=1, description="Изображение (file_id или URL)")
    availability: bool = Field(default=True, description="Доступен ли автомобиль")
    rc_doc: Optional[str] = Field(None, description="Свидетельство о регистрации")
    insurance_doc: Optional[str] = Field(None, description="Страховой полис")

    @field_validator('name', 'brand', 'fuel_type')
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Обрезка пробелов и проверка на пустое значение"""
        v = v.strip()
        if not v:
            raise ValueError("Поле не может быть пустым")
        return v

    @field_validator('price_per_day')
    @classmethod
    def validate_price(cls, v: int) -> int:
        """Валидация цены"""
        if v <= 0:
            raise ValueError("Цена должна быть положительной")
        if v > 1000000:
            raise ValueError("Цена слишком большая (максимум 1000000)")
        return v
