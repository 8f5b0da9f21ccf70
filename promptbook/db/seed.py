"""Database seeding helpers."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from promptbook.models.user import Post, User
from promptbook.services.user_repository import STUB_POSTS, STUB_USERS

logger = logging.getLogger(__name__)


def ensure_seed_data(session: Session) -> bool:
    """Insert the stub users and posts into an empty store. Returns True when rows were added."""
    existing = session.scalar(select(func.count()).select_from(User))
    if existing:
        return False

    session.add_all(User(id=user_id, name=name) for user_id, name in STUB_USERS)
    session.flush()
    session.add_all(
        Post(id=post_id, creator_id=creator_id, prompt=prompt, tag=tag)
        for post_id, creator_id, prompt, tag in STUB_POSTS
    )
    session.commit()
    logger.info("[BOOTSTRAP] seeded %d users and %d posts", len(STUB_USERS), len(STUB_POSTS))
    return True
