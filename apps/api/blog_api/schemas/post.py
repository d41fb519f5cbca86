"""Post API schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Post(_CamelModel):
    id: int
    title: str
    content: str
    author_id: int
    is_hidden: bool


class CreatePostRequest(_CamelModel):
    title: str
    content: str
    author_id: int
    is_hidden: bool = False


class UpdatePostRequest(_CamelModel):
    """Partial update; only fields present in the body are written."""

    title: str | None = None
    content: str | None = None
    author_id: int | None = None
    is_hidden: bool | None = None
