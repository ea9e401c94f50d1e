from fastapi import APIRouter

from src.delivery.api.v1 import activity, change_requests, email_log, projects, push

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(projects.router)
api_router.include_router(change_requests.router)
api_router.include_router(push.router)
api_router.include_router(activity.router)
api_router.include_router(email_log.router)
