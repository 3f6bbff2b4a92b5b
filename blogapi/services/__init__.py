"""Application services."""

from blogapi.services.posts import PostDraft, PostService
from blogapi.services.slugs import slugify

__all__ = ["PostDraft", "PostService", "slugify"]
