"""Upload API endpoint.

Endpoints:
    POST /api/upload - Store a cover image (admin), return its public URL
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Request, UploadFile
from pydantic import BaseModel

from blogapi.api.dependencies import get_upload_service
from blogapi.auth.dependencies import require_admin
from blogapi.auth.jwt_handler import TokenClaims
from blogapi.storage.service import UploadService

router = APIRouter(prefix="/upload", tags=["upload"])


class UploadResponse(BaseModel):
    url: str
    filename: str


@router.post("", response_model=UploadResponse)
async def upload_file(
    request: Request,
    file: UploadFile = File(...),
    service: UploadService = Depends(get_upload_service),
    _admin: TokenClaims = Depends(require_admin),
) -> UploadResponse:
    """Store the multipart field ``file`` under a generated name."""
    # one byte past the limit is enough for the service to reject it
    data = await file.read(service.config.max_bytes + 1)
    name = await service.store(data, file.filename)

    base = str(request.base_url).rstrip("/")
    return UploadResponse(url=f"{base}{service.public_url(name)}", filename=name)
