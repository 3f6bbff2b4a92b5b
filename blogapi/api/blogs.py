"""Blog post API endpoints.

Endpoints:
    GET    /api/blogs            - List, filter or search posts (paged)
    GET    /api/blogs/{slug}     - Get post by slug
    GET    /api/blogs/id/{id}    - Get post by ID
    POST   /api/blogs            - Create post (admin)
    PUT    /api/blogs/{id}       - Replace post fields (admin)
    DELETE /api/blogs/{id}       - Delete post (admin)

Examples:
    >>> GET /api/blogs?page=0&size=10&sort=createdAt,desc&publicOnly=true
    >>> {"items": [...], "total": 3, "page": 0, "size": 10, ...}
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import AliasChoices, BaseModel, Field, field_validator

from blogapi.api.dependencies import get_post_service
from blogapi.auth.dependencies import require_admin
from blogapi.auth.jwt_handler import TokenClaims
from blogapi.models import BlogPost
from blogapi.pagination import Page, PageRequest
from blogapi.services.posts import PostDraft, PostService

router = APIRouter(prefix="/blogs", tags=["blogs"])


# Request/Response Models


class PostRequest(BaseModel):
    """Writable post fields.

    Blank title/content are accepted here and rejected by the service, so
    every entry point shares one set of rules. On update, omitted optional
    fields are cleared.
    """

    title: str = Field(default="", max_length=255)
    content: str = Field(default="")
    cover_image: str | None = Field(
        default=None,
        max_length=512,
        validation_alias=AliasChoices("cover_image", "coverImage"),
    )
    tags: str | None = Field(
        default=None,
        max_length=512,
        description="Comma-separated tags; a JSON list is also accepted",
        examples=["python,fastapi"],
    )
    published: bool = False

    @field_validator("tags", mode="before")
    @classmethod
    def join_tag_list(cls, v):
        if isinstance(v, list):
            return ",".join(str(t) for t in v)
        return v

    def to_draft(self) -> PostDraft:
        return PostDraft(
            title=self.title,
            content=self.content,
            cover_image=self.cover_image,
            tags=self.tags,
            published=self.published,
        )


class PostResponse(BaseModel):
    id: int
    title: str
    slug: str
    content: str
    cover_image: str | None = None
    tags: str | None = None
    published: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PostPageResponse(BaseModel):
    items: list[PostResponse]
    total: int
    page: int
    size: int
    total_pages: int
    has_next: bool


def page_to_response(page: Page[BlogPost]) -> PostPageResponse:
    return PostPageResponse(
        items=[PostResponse.model_validate(p) for p in page.items],
        total=page.total,
        page=page.page,
        size=page.size,
        total_pages=page.total_pages,
        has_next=page.has_next,
    )


# Endpoints


@router.get("", response_model=PostPageResponse)
async def list_posts(
    page: int = Query(0, description="Page number (0-indexed)"),
    size: int = Query(10, description="Items per page (max 100)"),
    sort: str | None = Query(None, description="Sort as field[,dir], e.g. createdAt,desc"),
    search: str | None = Query(None, description="Match title or tags"),
    public_only: bool = Query(False, alias="publicOnly", description="Only published posts"),
    service: PostService = Depends(get_post_service),
) -> PostPageResponse:
    """List posts with pagination.

    `search` wins over `publicOnly`. Out-of-range paging values are clamped.
    """
    request = PageRequest.from_query(page, size, sort)

    if search:
        result = await service.search(search, request)
    elif public_only:
        result = await service.list_published(request)
    else:
        result = await service.list(request)

    return page_to_response(result)


@router.get("/id/{post_id}", response_model=PostResponse)
async def get_post_by_id(
    post_id: int,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    post = await service.get_by_id(post_id)
    return PostResponse.model_validate(post)


@router.get("/{slug}", response_model=PostResponse)
async def get_post_by_slug(
    slug: str,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Get post by slug. 404 if absent."""
    post = await service.get_by_slug(slug)
    return PostResponse.model_validate(post)


@router.post("", response_model=PostResponse)
async def create_post(
    request: PostRequest,
    service: PostService = Depends(get_post_service),
    _admin: TokenClaims = Depends(require_admin),
) -> PostResponse:
    post = await service.create(request.to_draft())
    return PostResponse.model_validate(post)


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: int,
    request: PostRequest,
    service: PostService = Depends(get_post_service),
    _admin: TokenClaims = Depends(require_admin),
) -> PostResponse:
    """Replace a post's fields. The slug is kept."""
    post = await service.update(post_id, request.to_draft())
    return PostResponse.model_validate(post)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: int,
    service: PostService = Depends(get_post_service),
    _admin: TokenClaims = Depends(require_admin),
) -> Response:
    await service.delete(post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
