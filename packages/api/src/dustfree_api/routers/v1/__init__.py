from fastapi import APIRouter

from dustfree_api.routers.v1 import (
    analytics,
    cleaner,
    cleaners,
    cleanings,
    payments,
    properties,
    session,
)

v1_router = APIRouter(prefix="/v1")

v1_router.include_router(session.router)
v1_router.include_router(properties.router)
v1_router.include_router(cleaners.router)
v1_router.include_router(cleanings.router)
v1_router.include_router(payments.router)
v1_router.include_router(analytics.router)
v1_router.include_router(cleaner.router)
