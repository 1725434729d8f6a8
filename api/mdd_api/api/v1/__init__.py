"""
API v1 router aggregation.
"""
from fastapi import APIRouter
from mdd_api.api.v1.endpoints import auth, users, topics

api_router = APIRouter()

# Note: Each router already defines its own prefix, so we don't add another one here
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(topics.router)
