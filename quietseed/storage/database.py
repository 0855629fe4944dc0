"""Durable content store on SQLModel.

Each operation opens its own short-lived ``Session``; concurrency control is
left to the database. Rows are refreshed before the session closes so the
returned objects stay readable after it is gone.
"""

import logging
from typing import Any, Dict, List, Optional, TypeVar

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, select, or_

from quietseed.models.category import Category
from quietseed.models.page_content import PageContent
from quietseed.models.post import Post
from quietseed.models.site_settings import SITE_SETTINGS_ID, SiteSettings
from quietseed.models.user import User
from quietseed.storage.base import DuplicateError, Storage, page_defaults

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)

_NEWEST_FIRST = (Post.published_at.desc(), Post.id)


def _like_pattern(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class DatabaseStorage(Storage):
    def __init__(self, engine: Engine):
        self.engine = engine

    def _session(self) -> Session:
        return Session(self.engine)

    def _insert(self, row: ModelT) -> ModelT:
        with self._session() as session:
            session.add(row)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateError(f"{type(row).__name__} violates a unique constraint") from exc
            session.refresh(row)
            return row

    def _update(self, model: type, key: Any, fields: Dict[str, Any]):
        with self._session() as session:
            row = session.get(model, key)
            if row is None:
                return None
            for name, value in fields.items():
                setattr(row, name, value)
            session.add(row)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateError(f"{model.__name__} violates a unique constraint") from exc
            session.refresh(row)
            return row

    # Users

    def get_user(self, user_id: int) -> Optional[User]:
        with self._session() as session:
            return session.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._session() as session:
            return session.exec(select(User).where(User.username == username)).first()

    def _insert_user(self, fields: Dict[str, Any]) -> User:
        return self._insert(User(**fields))

    def _update_user(self, user_id: int, fields: Dict[str, Any]) -> Optional[User]:
        return self._update(User, user_id, fields)

    # Categories

    def get_all_categories(self) -> List[Category]:
        with self._session() as session:
            return list(session.exec(select(Category).order_by(Category.id)).all())

    def get_category_by_slug(self, slug: str) -> Optional[Category]:
        with self._session() as session:
            return session.exec(select(Category).where(Category.slug == slug)).first()

    def get_category_by_id(self, category_id: int) -> Optional[Category]:
        with self._session() as session:
            return session.get(Category, category_id)

    def _insert_category(self, fields: Dict[str, Any]) -> Category:
        return self._insert(Category(**fields))

    # Posts

    def get_all_posts(self) -> List[Post]:
        with self._session() as session:
            return list(session.exec(select(Post).order_by(*_NEWEST_FIRST)).all())

    def get_post(self, post_id: int) -> Optional[Post]:
        with self._session() as session:
            return session.get(Post, post_id)

    def get_post_by_slug(self, slug: str) -> Optional[Post]:
        with self._session() as session:
            return session.exec(select(Post).where(Post.slug == slug)).first()

    def _get_posts_in_category(self, category_id: int) -> List[Post]:
        with self._session() as session:
            statement = (
                select(Post).where(Post.category_id == category_id).order_by(*_NEWEST_FIRST)
            )
            return list(session.exec(statement).all())

    def _search_posts(self, query: str) -> List[Post]:
        pattern = _like_pattern(query)
        with self._session() as session:
            statement = (
                select(Post)
                .where(
                    or_(
                        Post.title.ilike(pattern, escape="\\"),
                        Post.content.ilike(pattern, escape="\\"),
                        Post.excerpt.ilike(pattern, escape="\\"),
                    )
                )
                .order_by(*_NEWEST_FIRST)
            )
            return list(session.exec(statement).all())

    def _insert_post(self, fields: Dict[str, Any]) -> Post:
        return self._insert(Post(**fields))

    def _update_post(self, post_id: int, fields: Dict[str, Any]) -> Optional[Post]:
        return self._update(Post, post_id, fields)

    def _delete_post(self, post_id: int) -> bool:
        with self._session() as session:
            post = session.get(Post, post_id)
            if post is None:
                return False
            session.delete(post)
            session.commit()
            return True

    # Site settings

    def get_site_settings(self) -> SiteSettings:
        with self._session() as session:
            row = session.get(SiteSettings, SITE_SETTINGS_ID)
            if row is not None:
                return row
            row = SiteSettings(id=SITE_SETTINGS_ID)
            session.add(row)
            try:
                session.commit()
            except IntegrityError:
                # Another request created it first
                session.rollback()
                return session.get(SiteSettings, SITE_SETTINGS_ID)
            session.refresh(row)
            logger.info("Seeded default site settings")
            return row

    def _save_site_settings(self, fields: Dict[str, Any]) -> SiteSettings:
        self.get_site_settings()
        return self._update(SiteSettings, SITE_SETTINGS_ID, fields)

    # Page content

    def get_page_content(self, page_id: str) -> Optional[PageContent]:
        with self._session() as session:
            row = session.get(PageContent, page_id)
            if row is not None:
                return row
            defaults = page_defaults(page_id)
            if defaults is None:
                return None
            row = PageContent(id=page_id, **defaults)
            session.add(row)
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                return session.get(PageContent, page_id)
            session.refresh(row)
            logger.info("Seeded default content for page '%s'", page_id)
            return row

    def _upsert_page(
        self, page_id: str, fields: Dict[str, Any], defaults: Dict[str, Any]
    ) -> PageContent:
        updated = self._update(PageContent, page_id, fields)
        if updated is not None:
            return updated
        try:
            return self._insert(PageContent(id=page_id, **{**defaults, **fields}))
        except DuplicateError:
            # Inserted between our read and write; apply the edit on top
            return self._update(PageContent, page_id, fields)
