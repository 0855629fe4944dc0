"""Storage contract shared by the volatile and the durable content stores.

Every public operation lives here once. Field normalization, uniqueness
checks, the featured-post policy and the category fallback are decided in
this class, so ``MemStorage`` and ``DatabaseStorage`` only implement the
primitive reads and writes underneath (the ``_``-prefixed hooks).

Lookups that miss return ``None`` (or an empty list, or ``False`` for
deletes). Only invalid input raises, as ``InvalidFieldError`` or
``DuplicateError``.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Mapping, Optional

from quietseed.core.text import (
    coerce_bool,
    coerce_datetime,
    slugify,
    truncate_html,
    utcnow,
)
from quietseed.models.category import Category
from quietseed.models.page_content import DEFAULT_PAGES, PageContent
from quietseed.models.post import Post, PostWithDetails
from quietseed.models.site_settings import SiteSettings
from quietseed.models.user import User

logger = logging.getLogger(__name__)

# Category slug that lists every post
ALL_CATEGORIES = "all"
EXCERPT_LENGTH = 160

USER_FIELDS = ("username", "password_hash", "display_name", "is_admin")
CATEGORY_FIELDS = ("name", "slug", "description")
POST_FIELDS = (
    "title",
    "slug",
    "content",
    "excerpt",
    "image_url",
    "published_at",
    "category_id",
    "author_id",
    "featured",
)
SETTINGS_FIELDS = ("tagline",)
PAGE_FIELDS = ("title", "content")

# Columns that may be omitted on create (a default applies) but never nulled
_DEFAULTED_POST_FIELDS = ("slug", "excerpt", "published_at", "featured")
_REQUIRED_POST_FIELDS = ("title", "content", "author_id")


class StorageError(Exception):
    """Base class for content store failures caused by the caller's input."""


class DuplicateError(StorageError):
    """A unique key (slug, name, username) is already taken."""


class InvalidFieldError(StorageError, ValueError):
    """A field is missing, null where not allowed, or cannot be coerced."""


def _pick(data: Mapping[str, Any], names) -> Dict[str, Any]:
    return {name: data[name] for name in names if name in data}


def _reject_nulls(fields: Mapping[str, Any], names) -> None:
    for name in names:
        if name in fields and fields[name] is None:
            raise InvalidFieldError(f"{name} cannot be null")


def _coerce(fields: Dict[str, Any], name: str, coerce: Callable[[Any], Any]) -> None:
    if name not in fields:
        return
    try:
        fields[name] = coerce(fields[name])
    except ValueError as exc:
        raise InvalidFieldError(f"{name}: {exc}") from exc


def _next_timestamp(previous: Optional[datetime]) -> datetime:
    # updated_at must move forward even when two writes share a clock tick
    now = utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


def page_defaults(page_id: str) -> Optional[Dict[str, str]]:
    """Built-in title/content for a page id, or None for pages without one."""
    defaults = DEFAULT_PAGES.get(page_id)
    return dict(defaults) if defaults else None


class Storage(ABC):
    # Users

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    def _insert_user(self, fields: Dict[str, Any]) -> User: ...

    @abstractmethod
    def _update_user(self, user_id: int, fields: Dict[str, Any]) -> Optional[User]: ...

    def create_user(self, data: Mapping[str, Any]) -> User:
        fields = _pick(data, USER_FIELDS)
        if not fields.get("username"):
            raise InvalidFieldError("username is required")
        if not fields.get("password_hash"):
            raise InvalidFieldError("password_hash is required")
        _reject_nulls(fields, ("display_name", "is_admin"))
        _coerce(fields, "is_admin", coerce_bool)
        if self.get_user_by_username(fields["username"]) is not None:
            raise DuplicateError(f"Username '{fields['username']}' is already taken")

        user = self._insert_user(fields)
        logger.info("Created user %s (%s)", user.id, user.username)
        return user

    def update_user(self, user_id: int, data: Mapping[str, Any]) -> Optional[User]:
        fields = _pick(data, USER_FIELDS)
        _reject_nulls(fields, USER_FIELDS)
        _coerce(fields, "is_admin", coerce_bool)
        if "username" in fields:
            if not fields["username"]:
                raise InvalidFieldError("username cannot be empty")
            clash = self.get_user_by_username(fields["username"])
            if clash is not None and clash.id != user_id:
                raise DuplicateError(f"Username '{fields['username']}' is already taken")

        user = self._update_user(user_id, fields)
        if user is not None:
            logger.info("Updated user %s (%s)", user_id, ", ".join(sorted(fields)) or "no fields")
        return user

    # Categories

    @abstractmethod
    def get_all_categories(self) -> List[Category]:
        """All categories in insertion (id) order."""

    @abstractmethod
    def get_category_by_slug(self, slug: str) -> Optional[Category]: ...

    @abstractmethod
    def get_category_by_id(self, category_id: int) -> Optional[Category]: ...

    @abstractmethod
    def _insert_category(self, fields: Dict[str, Any]) -> Category: ...

    def create_category(self, data: Mapping[str, Any]) -> Category:
        fields = _pick(data, CATEGORY_FIELDS)
        if not fields.get("name"):
            raise InvalidFieldError("name is required")
        fields["slug"] = slugify(fields.get("slug") or fields["name"])
        if not fields["slug"]:
            raise InvalidFieldError("slug must contain at least one letter or digit")
        for existing in self.get_all_categories():
            if existing.slug == fields["slug"] or existing.name == fields["name"]:
                raise DuplicateError(f"Category '{fields['name']}' already exists")

        category = self._insert_category(fields)
        logger.info("Created category %s (%s)", category.id, category.slug)
        return category

    # Posts

    @abstractmethod
    def get_all_posts(self) -> List[Post]:
        """Every post, newest ``published_at`` first, ties in id order."""

    @abstractmethod
    def get_post(self, post_id: int) -> Optional[Post]: ...

    @abstractmethod
    def get_post_by_slug(self, slug: str) -> Optional[Post]: ...

    @abstractmethod
    def _get_posts_in_category(self, category_id: int) -> List[Post]: ...

    @abstractmethod
    def _search_posts(self, query: str) -> List[Post]: ...

    @abstractmethod
    def _insert_post(self, fields: Dict[str, Any]) -> Post: ...

    @abstractmethod
    def _update_post(self, post_id: int, fields: Dict[str, Any]) -> Optional[Post]: ...

    @abstractmethod
    def _delete_post(self, post_id: int) -> bool: ...

    def get_post_with_details(self, slug: str) -> Optional[PostWithDetails]:
        post = self.get_post_by_slug(slug)
        if post is None:
            return None
        return self._with_details(post)

    def get_featured_post(self) -> Optional[PostWithDetails]:
        """The flagged post with the lowest id, else the newest post."""
        posts = self.get_all_posts()
        if not posts:
            return None
        flagged = [post for post in posts if post.featured]
        chosen = min(flagged, key=lambda post: post.id) if flagged else posts[0]
        return self._with_details(chosen)

    def get_posts_by_category(self, category_slug: str) -> List[Post]:
        if category_slug == ALL_CATEGORIES:
            return self.get_all_posts()
        category = self.get_category_by_slug(category_slug)
        if category is None:
            return []
        return self._get_posts_in_category(category.id)

    def search_posts(self, query: Optional[str]) -> List[Post]:
        """Case-insensitive match on title, content or excerpt.

        A blank query matches everything.
        """
        if query is None or not query.strip():
            return self.get_all_posts()
        return self._search_posts(query.strip())

    def create_post(self, data: Mapping[str, Any]) -> Post:
        fields = self._prepare_post_fields(data)
        now = utcnow()
        fields["created_at"] = now
        fields["updated_at"] = now

        post = self._insert_post(fields)
        logger.info("Created post %s (%s)", post.id, post.slug)
        return post

    def update_post(self, post_id: int, data: Mapping[str, Any]) -> Optional[Post]:
        existing = self.get_post(post_id)
        if existing is None:
            return None
        fields = self._prepare_post_fields(data, existing)
        fields["updated_at"] = _next_timestamp(existing.updated_at)

        post = self._update_post(post_id, fields)
        if post is not None:
            logger.info("Updated post %s (%s)", post_id, ", ".join(sorted(fields)))
        return post

    def delete_post(self, post_id: int) -> bool:
        deleted = self._delete_post(post_id)
        if deleted:
            logger.info("Deleted post %s", post_id)
        return deleted

    def _prepare_post_fields(
        self, data: Mapping[str, Any], existing: Optional[Post] = None
    ) -> Dict[str, Any]:
        creating = existing is None
        fields = _pick(data, POST_FIELDS)

        if creating:
            for name in _DEFAULTED_POST_FIELDS:
                if fields.get(name) is None:
                    fields.pop(name, None)
            for name in _REQUIRED_POST_FIELDS:
                if name not in fields:
                    raise InvalidFieldError(f"{name} is required")
        _reject_nulls(fields, _DEFAULTED_POST_FIELDS + _REQUIRED_POST_FIELDS)

        if creating:
            fields.setdefault("slug", fields["title"])
            fields.setdefault("excerpt", truncate_html(fields["content"], EXCERPT_LENGTH))
            fields.setdefault("published_at", utcnow())
            fields.setdefault("featured", False)

        _coerce(fields, "featured", coerce_bool)
        _coerce(fields, "published_at", coerce_datetime)

        if "slug" in fields:
            slug = slugify(fields["slug"])
            if not slug:
                raise InvalidFieldError("slug must contain at least one letter or digit")
            clash = self.get_post_by_slug(slug)
            if clash is not None and (creating or clash.id != existing.id):
                raise DuplicateError(f"A post with slug '{slug}' already exists")
            fields["slug"] = slug

        if "author_id" in fields and self.get_user(fields["author_id"]) is None:
            raise InvalidFieldError(f"author_id {fields['author_id']} does not match a user")

        if creating or "category_id" in fields:
            fields["category_id"] = self._resolve_category_id(fields.get("category_id"))
        return fields

    def _resolve_category_id(self, category_id: Optional[int]) -> Optional[int]:
        # Unknown or missing categories fall back to the first one, if any
        if category_id is not None and self.get_category_by_id(category_id) is not None:
            return category_id
        categories = self.get_all_categories()
        return categories[0].id if categories else None

    def _with_details(self, post: Post) -> Optional[PostWithDetails]:
        author = self.get_user(post.author_id)
        if author is None:
            return None

        category = None
        if post.category_id is not None:
            category = self.get_category_by_id(post.category_id)
            if category is None:
                return None

        return PostWithDetails(
            **post.model_dump(),
            category_name=category.name if category else None,
            category_slug=category.slug if category else None,
            author_name=author.display_name or author.username,
        )

    # Site settings

    @abstractmethod
    def get_site_settings(self) -> SiteSettings:
        """Return the settings row, creating it with defaults if absent."""

    @abstractmethod
    def _save_site_settings(self, fields: Dict[str, Any]) -> SiteSettings: ...

    def update_site_settings(self, data: Mapping[str, Any]) -> SiteSettings:
        fields = _pick(data, SETTINGS_FIELDS)
        _reject_nulls(fields, SETTINGS_FIELDS)
        fields["updated_at"] = utcnow()

        site_settings = self._save_site_settings(fields)
        logger.info("Updated site settings")
        return site_settings

    # Page content

    @abstractmethod
    def get_page_content(self, page_id: str) -> Optional[PageContent]:
        """Return the page, creating it from DEFAULT_PAGES on first read.

        Page ids without built-in defaults are only ever created by
        ``update_page_content``.
        """

    @abstractmethod
    def _upsert_page(
        self, page_id: str, fields: Dict[str, Any], defaults: Dict[str, Any]
    ) -> PageContent: ...

    def update_page_content(self, page_id: str, data: Mapping[str, Any]) -> PageContent:
        fields = _pick(data, PAGE_FIELDS)
        _reject_nulls(fields, PAGE_FIELDS)
        fields["last_updated"] = utcnow()

        defaults = page_defaults(page_id) or {
            "title": page_id.replace("-", " ").title(),
            "content": "",
        }
        page = self._upsert_page(page_id, fields, defaults)
        logger.info("Saved page content '%s'", page_id)
        return page
