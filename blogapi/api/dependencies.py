"""Service factories wired per request."""

from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.database import get_db_session
from blogapi.repositories.posts import PostRepository
from blogapi.services.posts import PostService
from blogapi.storage.service import UploadService


def get_post_service(session: AsyncSession = Depends(get_db_session)) -> PostService:
    return PostService(PostRepository(session))


def get_upload_service(request: Request) -> UploadService:
    return request.app.state.upload_service
