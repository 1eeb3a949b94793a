from fastapi import APIRouter
from app.api.v1.auth import router as auth_router
from app.api.v1.clients import router as clients_router
from app.api.v1.workouts import router as workouts_router
from app.api.v1.sessions import router as sessions_router
from app.api.v1.measurements import router as measurements_router
from app.api.v1.notifications import router as notifications_router

api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(clients_router)
api_router.include_router(workouts_router)
api_router.include_router(sessions_router)
api_router.include_router(measurements_router)
api_router.include_router(notifications_router)
