"""
Маршруты автопарка
"""
from typing import Any, Dict, List
from fastapi import APIRouter, Body, Depends
from driveeasy.api.dependencies import get_car_repository
from driveeasy.database.repositories import CarRepository

router = APIRouter(prefix="/api/cars", tags=["cars"])


@router.get("")
async def list_cars(repo: CarRepository = Depends(get_car_repository)) -> List[Dict[str, Any]]:
    return await repo.get_all()


@router.post("")
async def save_car(
    car: Dict[str, Any] = Body(...),
    repo: CarRepository = Depends(get_car_repository)
) -> Dict[str, Any]:
    """Полная запись автомобиля; без id - новый автомобиль"""
    return await repo.upsert(car)


@router.delete("/{car_id}")
async def delete_car(car_id: int, repo: CarRepository = Depends(get_car_repository)) -> Dict[str, bool]:
    # Удаление несуществующего ID - не ошибка
    await repo.delete(car_id)
    return {"success": True}
