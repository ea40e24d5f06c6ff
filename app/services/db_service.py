from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from app.core.config import settings
from app.core.logger import logger

REVIEWS = "review"
TEAM = "team"
PRODUCTS = "products"
BOOKINGS = "booking"
SERVICES = "services"

COLLECTIONS = (REVIEWS, TEAM, PRODUCTS, BOOKINGS, SERVICES)

# Fields exposed on product and service detail pages
CARD_PROJECTION = {"_id": 0, "name": 1, "image": 1, "price": 1, "rating": 1}


class InvalidDocumentId(ValueError):
    """Raised when a path id is not a 24 character hex ObjectId."""


def parse_object_id(value: str) -> ObjectId:
    # ObjectId(None) would mint a fresh id, so only strings get through
    if not isinstance(value, str):
        raise InvalidDocumentId(f"'{value}' is not a valid document id")
    try:
        return ObjectId(value)
    except InvalidId as e:
        raise InvalidDocumentId(f"'{value}' is not a valid document id") from e


def serialize_document(value: Any) -> Any:
    """Make a Mongo document JSON friendly (ObjectId -> str, recursively)."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: serialize_document(item) for key, item in value.items()}
    if isinstance(value, list):
        return [serialize_document(item) for item in value]
    return value


class DBService:
    """
    Holds the one MongoDB client of the process.

    The client is created by connect() at startup, shared by every request
    and released by close() at shutdown. A failed startup ping is logged and
    the process keeps serving; requests then fail at the first query.
    """
    _instance = None
    _client: Optional[AsyncMongoClient] = None
    _database = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(DBService, cls).__new__(cls)
        return cls._instance

    def _create_client(self) -> AsyncMongoClient:
        return AsyncMongoClient(
            settings.mongodb_uri,
            server_api=ServerApi("1", strict=True, deprecation_errors=True),
        )

    async def connect(self) -> bool:
        try:
            self.get_database()
            await self.ping()
            logger.info(f"✅ Connected to MongoDB (database '{settings.DB_NAME}')")
            return True
        except PyMongoError as e:
            logger.error(f"❌ Failed to connect to MongoDB: {e}")
            return False

    async def close(self):
        if self._client is not None:
            await self._client.close()
            logger.info("MongoDB client closed")
        self._client = None
        self._database = None

    def get_client(self) -> AsyncMongoClient:
        # connect() may never have run (scripts); the driver connects lazily
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def get_database(self):
        if self._database is None:
            self._database = self.get_client()[settings.DB_NAME]
        return self._database

    def collection(self, name: str):
        if name not in COLLECTIONS:
            raise KeyError(f"Unknown collection: {name}")
        return self.get_database()[name]

    async def ping(self) -> Dict[str, Any]:
        return await self.get_client().admin.command("ping")

    async def find_all(self, name: str, query: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        cursor = self.collection(name).find(query or {})
        documents = await cursor.to_list(length=None)
        return [serialize_document(doc) for doc in documents]

    async def find_one_by_id(
        self,
        name: str,
        document_id: str,
        projection: Optional[Dict[str, int]] = None,
    ) -> Optional[Dict[str, Any]]:
        query = {"_id": parse_object_id(document_id)}
        document = await self.collection(name).find_one(query, projection)
        return serialize_document(document)

    async def insert_one(self, name: str, document: Dict[str, Any]) -> str:
        result = await self.collection(name).insert_one(document)
        logger.info(f"🆕 Inserted document {result.inserted_id} into '{name}'")
        return str(result.inserted_id)

    async def delete_one_by_id(
        self,
        name: str,
        document_id: str,
        extra_filter: Optional[Dict[str, Any]] = None,
    ) -> int:
        query = {"_id": parse_object_id(document_id)}
        if extra_filter:
            query.update(extra_filter)
        result = await self.collection(name).delete_one(query)
        logger.info(f"🗑️ Deleted {result.deleted_count} document(s) with id {document_id} from '{name}'")
        return result.deleted_count

db_service = DBService()
