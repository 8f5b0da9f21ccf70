"""User and post schemas."""

from pydantic import BaseModel, ConfigDict


class UserRead(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class PostRead(BaseModel):
    id: int
    creator_id: int
    prompt: str
    tag: str

    model_config = ConfigDict(from_attributes=True)


class SessionUserRead(BaseModel):
    id: int
    name: str


class SessionRead(BaseModel):
    user: SessionUserRead | None = None
