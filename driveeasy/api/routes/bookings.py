"""
Маршруты бронирований
"""
from typing import Any, Dict, List
from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from driveeasy.api.dependencies import get_booking_repository
from driveeasy.database.repositories import BookingRepository

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.get("")
async def list_bookings(repo: BookingRepository = Depends(get_booking_repository)) -> List[Dict[str, Any]]:
    """Бронирования с присоединенными car и user"""
    return await repo.get_all()


@router.post("")
async def create_booking(
    booking: Dict[str, Any] = Body(...),
    repo: BookingRepository = Depends(get_booking_repository)
) -> Dict[str, Any]:
    return await repo.create(booking)


@router.patch("/{booking_id}")
async def update_booking(
    booking_id: int,
    fields: Dict[str, Any] = Body(...),
    repo: BookingRepository = Depends(get_booking_repository)
):
    updated = await repo.update_status(booking_id, fields)
    if updated is None:
        return JSONResponse(status_code=404, content={"error": "Not found"})
    return updated
