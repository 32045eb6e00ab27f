"""
chargemap backend: FastAPI application.

Run with: uvicorn chargemap.main:app --reload
"""
import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .exception_handlers import register_exception_handlers
from .lifespan import lifespan
from .middleware import LoggingMiddleware, RequestIDMiddleware
from .routers import companies, stations, health

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger("chargemap")

app = FastAPI(
    title="Chargemap API",
    version="0.1.0",
    description="Companies, their charging stations, and geo/ownership queries",
    lifespan=lifespan,
)

# Middleware runs in reverse order of registration: RequestID first, then Logging
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_origins != ["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health.router)
app.include_router(companies.router)
app.include_router(stations.router)
