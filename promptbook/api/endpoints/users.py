"""User endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from promptbook.schemas.user import PostRead, UserRead
from promptbook.services.user_repository import UserRepository, get_user_repository

router: APIRouter = APIRouter()


@router.get("", response_model=list[UserRead], summary="List users")
def list_users(repository: UserRepository = Depends(get_user_repository)) -> list[UserRead]:
    """Return every known user in insertion order."""
    return repository.list_users()


@router.get("/{user_id}/posts", response_model=list[PostRead], summary="List a user's posts")
def list_user_posts(user_id: int, repository: UserRepository = Depends(get_user_repository)) -> list[PostRead]:
    if repository.get_user(user_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return repository.list_posts(user_id)
