import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.core.config import settings
from app.core.database import init_database
from app.core.db import AsyncSessionLocal
from app.core.errors import register_exception_handlers
from app.core.seed import ensure_trainer_account

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="PT CRM - personal trainer client management")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    await init_database()

    async with AsyncSessionLocal() as session:
        await ensure_trainer_account(session)

    logger.info("Приложение запущено!")


@app.get("/")
async def root():
    return {
        "app": "PT CRM",
        "links": {
            "api": "/api/v1",
            "docs": "/docs",
            "redoc": "/redoc",
        },
    }
