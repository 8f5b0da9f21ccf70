"""Schema exports."""

from promptbook.schemas.user import PostRead, SessionRead, SessionUserRead, UserRead

__all__ = [
    "PostRead",
    "SessionRead",
    "SessionUserRead",
    "UserRead",
]
