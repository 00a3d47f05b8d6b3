from fastapi import APIRouter

from .smart_selection import router as smart_selection_router
from .rates import router as rates_router
from .carriers import router as carriers_router
from .health import router as health_router

api_router = APIRouter()

api_router.include_router(
    smart_selection_router,
    prefix="/smart-selection",
    tags=["Smart Selection"],
)

api_router.include_router(
    rates_router,
    prefix="/rates",
    tags=["Rates"],
)

api_router.include_router(
    carriers_router,
    prefix="/carriers",
    tags=["Carriers"],
)

api_router.include_router(
    health_router,
    prefix="/health",
    tags=["Health"],
)
