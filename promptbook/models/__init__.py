"""ORM model exports."""

from promptbook.models.user import Post, User

__all__ = ["Post", "User"]
