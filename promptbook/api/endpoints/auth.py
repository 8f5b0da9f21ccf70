"""Session introspection endpoint."""

from fastapi import APIRouter, Request

from promptbook.auth import get_current_user
from promptbook.schemas.user import SessionRead, SessionUserRead

router: APIRouter = APIRouter()


@router.get("/session", response_model=SessionRead, response_model_exclude_none=True)
def read_session(request: Request) -> SessionRead:
    current = get_current_user(request)
    if current is None:
        return SessionRead()
    return SessionRead(user=SessionUserRead(id=int(current["id"]), name=str(current["name"])))
