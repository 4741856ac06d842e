# terra_server/api/routes/article_routes.py
from flask import Blueprint, jsonify, request

from terra_server.api.middlewares.auth_middleware import current_claims, require_auth, require_roles
from terra_server.api.schemas.article_schema import ArticleResponse, CreateArticleRequest, UpdateArticleRequest
from terra_server.entities.user import Role
from terra_server.infrastructure.database.session import db_session
from terra_server.repositories.article_repository import ArticleRepository
from terra_server.services.article_service import ArticleService

bp_articles = Blueprint("articles", __name__, url_prefix="/articles")


def _build_service(session) -> ArticleService:
    return ArticleService(ArticleRepository(session))


def _dump(article) -> dict:
    return ArticleResponse.model_validate(article).model_dump(mode="json")


@bp_articles.get("")
def list_articles():
    category = request.args.get("category")

    with db_session() as session:
        articles = _build_service(session).list_articles(category=category)
        data = [_dump(a) for a in articles]

    return jsonify({"data": data}), 200


@bp_articles.get("/<slug>")
def get_article(slug: str):
    with db_session() as session:
        data = _dump(_build_service(session).get_article(slug))

    return jsonify({"data": data}), 200


@bp_articles.post("")
@require_auth
@require_roles(Role.ADMIN.value)
def create_article():
    payload = CreateArticleRequest.model_validate(request.get_json(force=True))
    author_id = current_claims().user_id

    with db_session() as session:
        created = _build_service(session).create_article(author_id=author_id, **payload.model_dump())
        data = _dump(created)

    return jsonify({"data": data}), 201


@bp_articles.put("/<slug>")
@require_auth
@require_roles(Role.ADMIN.value)
def update_article(slug: str):
    payload = UpdateArticleRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        updated = _build_service(session).update_article(slug, **payload.model_dump(exclude_none=True))
        data = _dump(updated)

    return jsonify({"data": data}), 200


@bp_articles.delete("/<slug>")
@require_auth
@require_roles(Role.ADMIN.value)
def delete_article(slug: str):
    with db_session() as session:
        _build_service(session).delete_article(slug)

    return jsonify({"message": "Article deleted successfully"}), 200
