"""Volatile content store backed by plain dicts.

One instance lives for the lifetime of the app (or of a single test); nothing
survives a restart. Records go in and come out as copies, so callers never
hold a reference into the store.
"""

import itertools
import logging
from typing import Any, Dict, Iterable, List, Optional, TypeVar

from sqlmodel import SQLModel

from quietseed.models.category import Category
from quietseed.models.page_content import PageContent
from quietseed.models.post import Post
from quietseed.models.site_settings import SITE_SETTINGS_ID, SiteSettings
from quietseed.models.user import User
from quietseed.storage.base import Storage, page_defaults

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=SQLModel)


def _copy(record: Optional[RecordT]) -> Optional[RecordT]:
    if record is None:
        return None
    return type(record)(**record.model_dump())


def _copies(records: Iterable[RecordT]) -> List[RecordT]:
    return [_copy(record) for record in records]


def _newest_first(posts) -> List[Post]:
    # sorted() is stable with reverse=True, so equal dates keep id order
    return _copies(sorted(posts, key=lambda post: post.published_at, reverse=True))


class MemStorage(Storage):
    def __init__(self):
        self.users: Dict[int, User] = {}
        self.categories: Dict[int, Category] = {}
        self.posts: Dict[int, Post] = {}
        self.pages: Dict[str, PageContent] = {}
        self.site_settings: Optional[SiteSettings] = None

        self._user_ids = itertools.count(1)
        self._category_ids = itertools.count(1)
        self._post_ids = itertools.count(1)

    # Users

    def get_user(self, user_id: int) -> Optional[User]:
        return _copy(self.users.get(user_id))

    def get_user_by_username(self, username: str) -> Optional[User]:
        return _copy(next((u for u in self.users.values() if u.username == username), None))

    def _insert_user(self, fields: Dict[str, Any]) -> User:
        user = User(id=next(self._user_ids), **fields)
        self.users[user.id] = user
        return _copy(user)

    def _update_user(self, user_id: int, fields: Dict[str, Any]) -> Optional[User]:
        user = self.users.get(user_id)
        if user is None:
            return None
        for key, value in fields.items():
            setattr(user, key, value)
        return _copy(user)

    # Categories

    def get_all_categories(self) -> List[Category]:
        return _copies(self.categories.values())

    def get_category_by_slug(self, slug: str) -> Optional[Category]:
        return _copy(next((c for c in self.categories.values() if c.slug == slug), None))

    def get_category_by_id(self, category_id: int) -> Optional[Category]:
        return _copy(self.categories.get(category_id))

    def _insert_category(self, fields: Dict[str, Any]) -> Category:
        category = Category(id=next(self._category_ids), **fields)
        self.categories[category.id] = category
        return _copy(category)

    # Posts

    def get_all_posts(self) -> List[Post]:
        return _newest_first(self.posts.values())

    def get_post(self, post_id: int) -> Optional[Post]:
        return _copy(self.posts.get(post_id))

    def get_post_by_slug(self, slug: str) -> Optional[Post]:
        return _copy(next((post for post in self.posts.values() if post.slug == slug), None))

    def _get_posts_in_category(self, category_id: int) -> List[Post]:
        return _newest_first(p for p in self.posts.values() if p.category_id == category_id)

    def _search_posts(self, query: str) -> List[Post]:
        needle = query.lower()
        return _newest_first(
            post
            for post in self.posts.values()
            if needle in post.title.lower()
            or needle in post.content.lower()
            or needle in post.excerpt.lower()
        )

    def _insert_post(self, fields: Dict[str, Any]) -> Post:
        post = Post(id=next(self._post_ids), **fields)
        self.posts[post.id] = post
        return _copy(post)

    def _update_post(self, post_id: int, fields: Dict[str, Any]) -> Optional[Post]:
        post = self.posts.get(post_id)
        if post is None:
            return None
        for key, value in fields.items():
            setattr(post, key, value)
        return _copy(post)

    def _delete_post(self, post_id: int) -> bool:
        return self.posts.pop(post_id, None) is not None

    # Site settings

    def _stored_site_settings(self) -> SiteSettings:
        if self.site_settings is None:
            self.site_settings = SiteSettings(id=SITE_SETTINGS_ID)
            logger.info("Seeded default site settings")
        return self.site_settings

    def get_site_settings(self) -> SiteSettings:
        return _copy(self._stored_site_settings())

    def _save_site_settings(self, fields: Dict[str, Any]) -> SiteSettings:
        site_settings = self._stored_site_settings()
        for key, value in fields.items():
            setattr(site_settings, key, value)
        return _copy(site_settings)

    # Page content

    def get_page_content(self, page_id: str) -> Optional[PageContent]:
        page = self.pages.get(page_id)
        if page is None:
            defaults = page_defaults(page_id)
            if defaults is None:
                return None
            page = self.pages[page_id] = PageContent(id=page_id, **defaults)
            logger.info("Seeded default content for page '%s'", page_id)
        return _copy(page)

    def _upsert_page(
        self, page_id: str, fields: Dict[str, Any], defaults: Dict[str, Any]
    ) -> PageContent:
        page = self.pages.get(page_id)
        if page is None:
            page = self.pages[page_id] = PageContent(id=page_id, **{**defaults, **fields})
            return _copy(page)
        for key, value in fields.items():
            setattr(page, key, value)
        return _copy(page)
