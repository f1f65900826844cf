from fastapi import APIRouter
from multitimer.api import categories, health, history, notifications, timers

api_router = APIRouter()

# Include all sub-routers
api_router.include_router(timers.router)
api_router.include_router(categories.router)
api_router.include_router(history.router)
api_router.include_router(notifications.router)
api_router.include_router(health.router)
