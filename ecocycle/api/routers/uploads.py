"""
Upload API endpoints.

Routes:
- POST /uploads/presign - Presigned S3 PUT URL for a detection image or avatar

Dependencies: ecocycle.boundary.aws, ecocycle.core.security, ecocycle.models
System role: Direct-to-S3 image upload HTTP API
"""

import logging

from botocore.exceptions import ClientError
from fastapi import APIRouter, Depends

from ecocycle.api.deps import (
    AuthUser,
    get_current_user,
    get_s3_upload_client,
    get_settings_dependency,
    get_upload_rate_limiter,
)
from ecocycle.api.routers.router_utils import handle_service_errors
from ecocycle.boundary.aws import S3UploadClient
from ecocycle.configs import Settings
from ecocycle.core.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    RateLimitExceededError,
    UploadError,
)
from ecocycle.core.rate_limiter import SlidingWindowRateLimiter
from ecocycle.core.security import validate_file
from ecocycle.models.upload import PresignRequest, PresignResponse

logger = logging.getLogger(__name__)

UPLOAD_WINDOW_SECONDS = 60

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.post("/presign", response_model=PresignResponse)
@handle_service_errors
async def create_presigned_upload(
    request: PresignRequest,
    user: AuthUser = Depends(get_current_user),
    settings: Settings = Depends(get_settings_dependency),
    s3_client: S3UploadClient = Depends(get_s3_upload_client),
    limiter: SlidingWindowRateLimiter = Depends(get_upload_rate_limiter),
) -> PresignResponse:
    """
    Generate a presigned URL for uploading an image straight to S3.

    The file is checked against the size and type limits before any URL
    is issued; the client then PUTs the bytes with the same content type.

    Args:
        request: Purpose (detections or avatars), content type and size
        user: Authenticated user
        settings: Limits and bucket settings
        s3_client: Injected S3 uploads client
        limiter: Per-user upload rate limiter

    Returns:
        PresignResponse: Upload URL, download URL, object key and expiry

    Raises:
        HTTPException(413): File too large
        HTTPException(415): Content type not allowed
        HTTPException(429): Too many uploads in the last minute
    """
    limits = settings.limits
    check = validate_file(request.size, request.content_type, limits.max_file_size, limits.allowed_image_types)
    if not check.valid:
        if request.size > limits.max_file_size:
            raise FileTooLargeError(check.error, {"size": request.size, "max_size": limits.max_file_size})
        raise InvalidFileTypeError(check.error, {"content_type": request.content_type})

    if not limiter.is_allowed(f"upload:{user.user_id}", limits.max_uploads_per_minute, UPLOAD_WINDOW_SECONDS):
        raise RateLimitExceededError("upload", {"limit": limits.max_uploads_per_minute})

    try:
        upload = s3_client.generate_presigned_upload(
            prefix=request.purpose,
            user_id=str(user.user_id),
            content_type=request.content_type,
            expires_in=settings.s3_uploads.presigned_url_expiry,
        )
    except ClientError as e:
        logger.error("Presigned URL generation failed", extra={"user_id": str(user.user_id), "error": str(e)})
        raise UploadError("Could not create upload URL") from e

    logger.info("Presigned upload created", extra={"user_id": str(user.user_id), "key": upload.key})
    return PresignResponse(
        upload_url=upload.upload_url,
        download_url=upload.download_url,
        key=upload.key,
        expires_at=upload.expires_at,
    )
