from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import os
import uvicorn

from . import routers
from .database import init_db, check_db_connection
from .utils.router_helpers import http_exception_handler, validation_exception_handler

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"

# Initialize FastAPI app
app = FastAPI(
    title="Pantry Pilot API",
    description="Household pantry, shopping list and recipe planning API",
    version=APP_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
        if origin.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)


@app.on_event("startup")
async def startup_event():
    """Create tables when the app starts"""
    logger.info("Starting Pantry Pilot API...")
    init_db()


# Include routers
app.include_router(routers.households.router, prefix="/api")
app.include_router(routers.invitations.router, prefix="/api")
app.include_router(routers.pantries.router, prefix="/api")
app.include_router(routers.shopping_lists.router, prefix="/api")
app.include_router(routers.recipes.router, prefix="/api")


@app.get("/")
async def root():
    return {"message": "Welcome to Pantry Pilot API", "status": "running"}


@app.get("/health")
async def health_check():
    database = check_db_connection()
    return {
        "status": "healthy" if database["sqlalchemy"] else "degraded",
        "service": "pantry-pilot-api",
        "version": APP_VERSION,
        "database": database,
    }


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
