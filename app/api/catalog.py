from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from app.core.logger import logger
from app.services.db_service import (
    CARD_PROJECTION,
    PRODUCTS,
    REVIEWS,
    SERVICES,
    TEAM,
    InvalidDocumentId,
    db_service,
)

router = APIRouter()


def _error(status_code: int, message: str, error: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, "error": str(error)})


async def _list(collection: str, label: str):
    try:
        return await db_service.find_all(collection)
    except PyMongoError as e:
        logger.error(f"❌ DB Error (list {collection}): {e}")
        return _error(500, f"Error fetching {label}", e)


async def _card(collection: str, label: str, document_id: str):
    try:
        return await db_service.find_one_by_id(collection, document_id, CARD_PROJECTION)
    except InvalidDocumentId as e:
        return _error(400, f"Invalid {label} id", e)
    except PyMongoError as e:
        logger.error(f"❌ DB Error (get {collection}/{document_id}): {e}")
        return _error(500, f"Error fetching {label}", e)


@router.get("/review")
async def list_reviews():
    return await _list(REVIEWS, "reviews")


@router.get("/product")
async def list_products():
    return await _list(PRODUCTS, "products")


@router.get("/product/{product_id}")
async def get_product(product_id: str):
    return await _card(PRODUCTS, "product", product_id)


@router.get("/team")
async def list_team():
    return await _list(TEAM, "team members")


@router.get("/services")
async def list_services():
    return await _list(SERVICES, "services")


@router.get("/services/{service_id}")
async def get_service(service_id: str):
    return await _card(SERVICES, "service", service_id)
