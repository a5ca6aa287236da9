"""
API router aggregation.
"""
from fastapi import APIRouter
from app.api.endpoints import (
    auth, topics, lessons, search, admin_topics, admin_lessons, admin_stats
)

api_router = APIRouter()

# Each router already defines its own prefix, so we don't add another one here
api_router.include_router(auth.router)
api_router.include_router(topics.router)
api_router.include_router(lessons.router)
api_router.include_router(search.router)
api_router.include_router(admin_topics.router)
api_router.include_router(admin_lessons.router)
api_router.include_router(admin_stats.router)
