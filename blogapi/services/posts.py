"""Post service: validation, slug assignment and CRUD orchestration.

Examples:
    >>> service = PostService(PostRepository(session))
    >>> post = await service.create(PostDraft(title="Hello World", content="x"))
    >>> post.slug
    'hello-world'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

from blogapi.errors import InvalidInput, NotFound, SlugConflict
from blogapi.models import BlogPost
from blogapi.pagination import Page, PageRequest
from blogapi.repositories.posts import PostRepository
from blogapi.services.slugs import slugify, with_timestamp_suffix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostDraft:
    """Every writable field of a post. Used for both create and update."""

    title: str
    content: str
    cover_image: str | None = None
    tags: str | None = None
    published: bool = False


def normalize_tags(tags: str | None) -> str | None:
    """Strip each comma-separated tag and drop empties.

    Examples:
        >>> normalize_tags(" python, fastapi ,, ")
        'python,fastapi'
    """
    if not tags:
        return None
    cleaned = [t.strip() for t in tags.split(",")]
    joined = ",".join(t for t in cleaned if t)
    return joined or None


def validate_draft(draft: PostDraft) -> PostDraft:
    """Check required fields and return a normalised copy.

    Raises:
        InvalidInput: If title or content is blank.
    """
    title = (draft.title or "").strip()
    if not title:
        raise InvalidInput("Title is required")
    if not draft.content or not draft.content.strip():
        raise InvalidInput("Content is required")

    cover_image = (draft.cover_image or "").strip() or None
    return PostDraft(
        title=title,
        content=draft.content,
        cover_image=cover_image,
        tags=normalize_tags(draft.tags),
        published=bool(draft.published),
    )


class PostService:
    def __init__(self, posts: PostRepository) -> None:
        self.posts = posts

    async def list(self, request: PageRequest) -> Page[BlogPost]:
        return await self.posts.list(request)

    async def list_published(self, request: PageRequest) -> Page[BlogPost]:
        return await self.posts.list(request, published_only=True)

    async def search(self, query: str | None, request: PageRequest) -> Page[BlogPost]:
        """Match title or tags, ignoring case. A blank query matches nothing."""
        if not query or not query.strip():
            return Page.empty(request)
        return await self.posts.search(query.strip(), request)

    async def get_by_slug(self, slug: str) -> BlogPost:
        post = await self.posts.get_by_slug(slug)
        if post is None:
            raise NotFound(f"Blog post not found with slug: {slug}")
        return post

    async def get_by_id(self, post_id: int) -> BlogPost:
        post = await self.posts.get(post_id)
        if post is None:
            raise NotFound(f"Blog post not found with id: {post_id}")
        return post

    async def create(self, draft: PostDraft) -> BlogPost:
        """Create a post with a unique slug derived from its title.

        Raises:
            InvalidInput: If title or content is blank.
            SlugConflict: If the store still rejects the slug after the
                timestamp suffix was applied.
        """
        draft = validate_draft(draft)

        slug = slugify(draft.title)
        if await self.posts.slug_exists(slug):
            slug = with_timestamp_suffix(slug)

        try:
            post = await self.posts.add(
                title=draft.title,
                slug=slug,
                content=draft.content,
                cover_image=draft.cover_image,
                tags=draft.tags,
                published=draft.published,
            )
        except IntegrityError:
            logger.warning(f"Slug collision on insert: {slug}")
            raise SlugConflict(f"Slug already in use: {slug}; retry the request")

        logger.info(f"Post created: id={post.id} slug={post.slug}")
        return post

    async def update(self, post_id: int, draft: PostDraft) -> BlogPost:
        """Replace every mutable field of a post. The slug never changes.

        Optional fields missing from the draft are cleared.
        """
        draft = validate_draft(draft)
        post = await self.get_by_id(post_id)

        post = await self.posts.update(
            post,
            title=draft.title,
            content=draft.content,
            cover_image=draft.cover_image,
            tags=draft.tags,
            published=draft.published,
        )
        logger.info(f"Post updated: id={post.id}")
        return post

    async def delete(self, post_id: int) -> None:
        post = await self.get_by_id(post_id)
        await self.posts.delete(post)
        logger.info(f"Post deleted: id={post_id}")
