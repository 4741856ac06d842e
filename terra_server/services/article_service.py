# terra_server/services/article_service.py

from terra_server.core.exceptions import BadRequestError, NotFoundError
from terra_server.core.storage_errors import wraps_storage_errors
from terra_server.core.utils import generate_slug, new_id, require_text, utcnow, with_slug_suffix
from terra_server.infrastructure.database.models.article_model import ArticleModel
from terra_server.repositories.article_repository import ArticleRepository


class ArticleService:
    """Articles are addressed by slug; the slug follows the title."""

    def __init__(self, article_repository: ArticleRepository) -> None:
        self._article_repository = article_repository

    def _unique_slug(self, title: str) -> str:
        slug = generate_slug(title)
        if not slug:
            raise BadRequestError("Title must contain letters or digits")
        if self._article_repository.slug_exists(slug):
            slug = with_slug_suffix(slug)
        return slug

    @wraps_storage_errors("create article")
    def create_article(
        self,
        *,
        author_id: str,
        title: str,
        content: str,
        category: str,
        image_url: str | None = None,
    ) -> ArticleModel:
        title = require_text(title, "Title")
        now = utcnow()
        model = ArticleModel(
            id=new_id(),
            title=title,
            slug=self._unique_slug(title),
            content=require_text(content, "Content"),
            image_url=image_url,
            category=require_text(category, "Category"),
            author_id=author_id,
            published_at=now,
            created_at=now,
            updated_at=now,
        )
        return self._article_repository.add(model)

    @wraps_storage_errors("list articles")
    def list_articles(self, *, category: str | None = None) -> list[ArticleModel]:
        category = (category or "").strip() or None
        return self._article_repository.list_all(category=category)

    @wraps_storage_errors("get article")
    def get_article(self, slug: str) -> ArticleModel:
        article = self._article_repository.get_by_slug(slug)
        if article is None:
            raise NotFoundError("Article not found")
        return article

    @wraps_storage_errors("update article")
    def update_article(
        self,
        slug: str,
        *,
        title: str | None = None,
        content: str | None = None,
        category: str | None = None,
        image_url: str | None = None,
    ) -> ArticleModel:
        article = self.get_article(slug)

        if title is not None:
            title = require_text(title, "Title")
            if title != article.title:
                new_slug = generate_slug(title)
                if not new_slug:
                    raise BadRequestError("Title must contain letters or digits")
                if new_slug != article.slug and self._article_repository.slug_exists(new_slug):
                    new_slug = with_slug_suffix(new_slug)
                article.slug = new_slug
            article.title = title
        if content is not None:
            article.content = require_text(content, "Content")
        if category is not None:
            article.category = require_text(category, "Category")
        if image_url is not None:
            article.image_url = image_url

        article.updated_at = utcnow()
        self._article_repository.flush()
        return article

    @wraps_storage_errors("delete article")
    def delete_article(self, slug: str) -> None:
        ok = self._article_repository.delete_by_slug(slug)
        if not ok:
            raise NotFoundError("Article not found")
