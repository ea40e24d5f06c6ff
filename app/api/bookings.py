from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from app.core.logger import logger
from app.core.security import booking_caller
from app.models.schemas import BookingCreate, normalize_email
from app.services.db_service import BOOKINGS, InvalidDocumentId, db_service

router = APIRouter()


def _caller_email(caller: Optional[Dict[str, Any]]) -> Optional[str]:
    if caller is None:
        return None
    email = caller.get("email")
    if not isinstance(email, str) or not email.strip():
        raise HTTPException(status_code=403, detail="forbidden access")
    return normalize_email(email)


@router.get("/booking")
async def list_bookings(
    email: Optional[str] = None,
    caller: Optional[Dict[str, Any]] = Depends(booking_caller),
):
    """
    Bookings, optionally filtered by e-mail.
    With a session the list is limited to the caller's own bookings.
    """
    caller_email = _caller_email(caller)
    if email is not None:
        email = normalize_email(email)
    if caller_email is not None:
        if email is not None and email != caller_email:
            raise HTTPException(status_code=403, detail="forbidden access")
        email = caller_email

    query = {"email": email} if email else None
    try:
        return await db_service.find_all(BOOKINGS, query)
    except PyMongoError as e:
        logger.error(f"❌ DB Error (list bookings): {e}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Error fetching bookings", "error": str(e)},
        )


@router.post("/booking", status_code=201)
async def create_booking(
    booking: BookingCreate,
    caller: Optional[Dict[str, Any]] = Depends(booking_caller),
):
    caller_email = _caller_email(caller)
    if caller_email is not None and booking.email != caller_email:
        raise HTTPException(status_code=403, detail="forbidden access")

    try:
        inserted_id = await db_service.insert_one(BOOKINGS, booking.model_dump(exclude_unset=True))
    except PyMongoError as e:
        logger.error(f"❌ DB Error (create booking): {e}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Error creating booking"},
        )

    return {"success": True, "result": {"acknowledged": True, "insertedId": inserted_id}}


@router.delete("/booking/{booking_id}")
async def delete_booking(
    booking_id: str,
    caller: Optional[Dict[str, Any]] = Depends(booking_caller),
):
    caller_email = _caller_email(caller)
    owner_filter = {"email": caller_email} if caller_email else None

    try:
        deleted = await db_service.delete_one_by_id(BOOKINGS, booking_id, owner_filter)
    except InvalidDocumentId as e:
        return JSONResponse(status_code=400, content={"message": "Invalid booking id", "error": str(e)})
    except PyMongoError as e:
        logger.error(f"❌ DB Error (delete booking {booking_id}): {e}")
        return JSONResponse(
            status_code=500,
            content={"message": "Error deleting booking", "error": str(e)},
        )

    return {"acknowledged": True, "deletedCount": deleted}
