"""API router composition."""

from fastapi import APIRouter

from promptbook.api.endpoints import auth, users

api_router: APIRouter = APIRouter()
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
