from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pymongo.errors import PyMongoError
from app.core.config import settings
from app.api import auth, bookings, catalog
from app.core.logger import setup_logging, logger
from app.services.db_service import db_service
from contextlib import asynccontextmanager
from datetime import datetime

setup_logging(settings.LOG_LEVEL, settings.ERROR_LOG_PATH)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # One client for the whole process, released on shutdown
    logger.info("🚀 Starting Cars Haven backend")
    await db_service.connect()
    yield
    await db_service.close()
    logger.info("🛑 Shutting down backend")

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Global Exception Handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"🔥 UNHANDLED ERROR on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal Server Error", "detail": "An unexpected error occurred."}
    )

app.include_router(catalog.router, tags=["Catalog"])
app.include_router(bookings.router, tags=["Bookings"])
app.include_router(auth.router, tags=["Auth"])

@app.get("/", response_class=PlainTextResponse)
async def welcome():
    return "Welcome to Cars Haven"

@app.get("/health")
async def health_check():
    try:
        await db_service.ping()
        database = "ok"
    except PyMongoError as e:
        logger.warning(f"⚠️ Health check ping failed: {e}")
        database = "unavailable"
    return {"status": "ok", "database": database, "environment": settings.ENVIRONMENT, "time": datetime.now().isoformat()}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT, reload=settings.ENVIRONMENT == "development")
