# terra_server/api/schemas/article_schema.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateArticleRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    category: str = Field(min_length=1, max_length=100)
    image_url: Optional[str] = Field(default=None, max_length=500)


class UpdateArticleRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    image_url: Optional[str] = Field(default=None, max_length=500)


class ArticleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    slug: str
    content: str
    image_url: Optional[str] = None
    category: str
    author_id: Optional[str] = None
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
