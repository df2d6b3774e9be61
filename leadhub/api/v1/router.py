from fastapi import APIRouter
from leadhub.api.v1.endpoints import leads, chat, services, profiles, dashboard

api_router = APIRouter()
api_router.include_router(leads.router, prefix="/leads", tags=["leads"])
api_router.include_router(chat.router, prefix="/chat", tags=["chat"])
api_router.include_router(services.router, prefix="/services", tags=["services"])
api_router.include_router(profiles.router, prefix="/profiles", tags=["profiles"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
