from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from api.api import api_router
from core.config import configs
from core.logger import setup_logging

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"🔧 Starting {configs.PROJECT_NAME} ({configs.ENVIRONMENT})...")
    yield
    # Shutdown
    logger.info("🛑 Shutting down Photo Info Engine...")

app = FastAPI(
    title=configs.PROJECT_NAME,
    description="Derives field of view, GPS and orientation from photo metadata",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS (Allow all for development env)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")
app.mount("/metrics", make_asgi_app())

@app.get("/")
async def root():
    return {"message": "Photo Info Engine Running"}

@app.get("/health")
async def health_check():
    return {"status": "ok"}
