"""Blog post store."""

from __future__ import annotations

from sqlalchemy import Select, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.models import BlogPost, utcnow
from blogapi.pagination import Page, PageRequest, SortDirection, SortField

_SORT_COLUMNS = {
    SortField.CREATED_AT: BlogPost.created_at,
    SortField.UPDATED_AT: BlogPost.updated_at,
    SortField.TITLE: BlogPost.title,
    SortField.ID: BlogPost.id,
}


class PostRepository:
    """Persists blog posts and runs paged queries over them.

    Timestamps are set here, at the call site, rather than by column defaults.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, post_id: int) -> BlogPost | None:
        return await self.session.get(BlogPost, post_id)

    async def get_by_slug(self, slug: str) -> BlogPost | None:
        result = await self.session.execute(
            select(BlogPost).where(BlogPost.slug == slug)
        )
        return result.scalar_one_or_none()

    async def slug_exists(self, slug: str) -> bool:
        result = await self.session.execute(
            select(BlogPost.id).where(BlogPost.slug == slug)
        )
        return result.first() is not None

    async def count(self) -> int:
        result = await self.session.execute(select(func.count(BlogPost.id)))
        return result.scalar_one()

    async def list(self, request: PageRequest, published_only: bool = False) -> Page[BlogPost]:
        query = select(BlogPost)
        if published_only:
            query = query.where(BlogPost.published.is_(True))
        return await self._paginate(query, request)

    async def search(self, text: str, request: PageRequest) -> Page[BlogPost]:
        """Case-insensitive substring match on title or tags."""
        pattern = f"%{_escape_like(text.lower())}%"
        query = select(BlogPost).where(
            or_(
                func.lower(BlogPost.title).like(pattern, escape="\\"),
                func.lower(func.coalesce(BlogPost.tags, "")).like(pattern, escape="\\"),
            )
        )
        return await self._paginate(query, request)

    async def add(
        self,
        *,
        title: str,
        slug: str,
        content: str,
        cover_image: str | None,
        tags: str | None,
        published: bool,
    ) -> BlogPost:
        """Insert a post.

        Raises:
            IntegrityError: If the slug is already taken. The session has
                been rolled back when this propagates.
        """
        now = utcnow()
        post = BlogPost(
            title=title,
            slug=slug,
            content=content,
            cover_image=cover_image,
            tags=tags,
            published=published,
            created_at=now,
            updated_at=now,
        )
        self.session.add(post)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            raise
        return post

    async def update(
        self,
        post: BlogPost,
        *,
        title: str,
        content: str,
        cover_image: str | None,
        tags: str | None,
        published: bool,
    ) -> BlogPost:
        """Overwrite every mutable field. The slug is left alone."""
        post.title = title
        post.content = content
        post.cover_image = cover_image
        post.tags = tags
        post.published = published
        post.updated_at = utcnow()
        await self.session.flush()
        return post

    async def delete(self, post: BlogPost) -> None:
        await self.session.delete(post)
        await self.session.flush()

    async def _paginate(self, query: Select, request: PageRequest) -> Page[BlogPost]:
        count_result = await self.session.execute(
            select(func.count()).select_from(query.subquery())
        )
        total = count_result.scalar_one()

        column = _SORT_COLUMNS[request.sort_field]
        order = column.asc() if request.sort_dir == SortDirection.ASC else column.desc()
        # id breaks ties so pages never overlap
        tiebreak = BlogPost.id.asc() if request.sort_dir == SortDirection.ASC else BlogPost.id.desc()
        query = query.order_by(order, tiebreak).offset(request.offset).limit(request.size)

        result = await self.session.execute(query)
        return Page(
            items=list(result.scalars().all()),
            total=total,
            page=request.page,
            size=request.size,
        )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
