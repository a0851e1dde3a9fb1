import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import Base, engine
from shared.helpers.exception_handler import setup_exception_handlers
from shared.wrappers.response_wrapper import JsonResponseMiddleware
from . import models  # noqa: F401  registers every table on Base
from .router.access_control import user_management_router
from .router.financials import transactions_router
from .router.hospitality import (
    guests_router,
    hotels_router,
    reservations_router,
    room_types_router,
    rooms_router,
)
from .router.overview import dashboard_router, reports_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = FastAPI(title="Hotel Service API")

# Create all tables
Base.metadata.create_all(bind=engine)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(JsonResponseMiddleware)

setup_exception_handlers(app)

# Include routers
app.include_router(hotels_router.router)
app.include_router(room_types_router.router)
app.include_router(rooms_router.router)
app.include_router(guests_router.router)
app.include_router(reservations_router.router)
app.include_router(transactions_router.router)
app.include_router(user_management_router.router)
app.include_router(dashboard_router.router)
app.include_router(reports_router.router)


@app.get("/api/health")
def health():
    return {"status": "healthy"}
