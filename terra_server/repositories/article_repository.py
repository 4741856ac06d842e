# terra_server/repositories/article_repository.py

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from terra_server.core.base_repository import BaseRepository
from terra_server.infrastructure.database.models.article_model import ArticleModel


class ArticleRepository(BaseRepository[ArticleModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_by_slug(self, slug: str) -> ArticleModel | None:
        stmt = select(ArticleModel).where(ArticleModel.slug == slug)
        return self._session.execute(stmt).scalar_one_or_none()

    def slug_exists(self, slug: str) -> bool:
        stmt = select(ArticleModel.id).where(ArticleModel.slug == slug)
        return self._session.execute(stmt).first() is not None

    def list_all(self, *, category: str | None = None) -> list[ArticleModel]:
        stmt = select(ArticleModel)
        if category:
            stmt = stmt.where(ArticleModel.category == category)
        stmt = stmt.order_by(ArticleModel.created_at.desc())
        return list(self._session.execute(stmt).scalars().all())

    def delete_by_slug(self, slug: str) -> bool:
        result = self._session.execute(delete(ArticleModel).where(ArticleModel.slug == slug))
        return (result.rowcount or 0) > 0
