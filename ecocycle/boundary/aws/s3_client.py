"""
S3 client for image uploads.

Generates presigned URLs so clients upload detection photos and avatars
straight to the bucket. Object keys embed the owning user id.

Dependencies: boto3
System role: API-level S3 operations for presigned URLs
"""

import secrets
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import boto3
from botocore.exceptions import ClientError

UPLOAD_PREFIXES = ("detections", "avatars")

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


@dataclass(frozen=True)
class PresignedUpload:
    upload_url: str
    download_url: str
    key: str
    expires_at: datetime


def build_object_key(prefix: str, user_id: str, content_type: str, now: float | None = None) -> str:
    """
    Build ``{prefix}/{user_id}-{timestamp_ms}-{random}.{ext}``.

    Args:
        prefix: Folder, one of UPLOAD_PREFIXES
        user_id: Owning user id
        content_type: Image MIME type (selects the extension)
        now: Epoch seconds (defaults to time.time())

    Returns:
        str: Object key
    """
    timestamp = int((now if now is not None else time.time()) * 1000)
    extension = _EXTENSIONS.get(content_type, "bin")
    return f"{prefix}/{user_id}-{timestamp}-{secrets.token_hex(4)}.{extension}"


class S3UploadClient:
    """S3 client for image bucket operations (presigned URLs only)."""

    def __init__(self, bucket: str, region: str = "ap-south-1", client: Any | None = None) -> None:
        """
        Initialize S3 client for the uploads bucket.

        Args:
            bucket: S3 bucket name for image storage
            region: AWS region for S3 bucket
            client: Pre-built boto3 S3 client (created from region when omitted)
        """
        self._bucket = bucket
        self._region = region
        self._s3_client = client or boto3.client("s3", region_name=region)

    def generate_presigned_upload(
        self,
        prefix: str,
        user_id: str,
        content_type: str,
        expires_in: int = 3600,
    ) -> PresignedUpload:
        """
        Generate a presigned PUT URL plus a matching GET URL for a new image.

        Args:
            prefix: Folder, one of UPLOAD_PREFIXES
            user_id: Owning user id
            content_type: Image MIME type the PUT must carry
            expires_in: URL expiry in seconds (default 1 hour)

        Returns:
            PresignedUpload: Upload URL, download URL, key and expiry

        Raises:
            ValueError: Unknown prefix
            ClientError: If presigned URL generation fails
        """
        if prefix not in UPLOAD_PREFIXES:
            raise ValueError(f"Unknown upload prefix: {prefix}")

        key = build_object_key(prefix, user_id, content_type)
        upload_url = self._s3_client.generate_presigned_url(
            ClientMethod="put_object",
            Params={
                "Bucket": self._bucket,
                "Key": key,
                "ContentType": content_type,
            },
            ExpiresIn=expires_in,
        )
        download_url = self.generate_presigned_download_url(key, expires_in)
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        return PresignedUpload(upload_url, download_url, key, expires_at)

    def generate_presigned_download_url(self, key: str, expires_in: int = 3600) -> str:
        return self._s3_client.generate_presigned_url(
            ClientMethod="get_object",
            Params={"Bucket": self._bucket, "Key": key},
            ExpiresIn=expires_in,
        )

    def file_exists(self, key: str) -> bool:
        """
        Check if an object exists in S3.

        Args:
            key: S3 object key to check

        Returns:
            bool: True if object exists, False otherwise
        """
        try:
            self._s3_client.head_object(Bucket=self._bucket, Key=key)
            return True
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey"):
                return False
            raise
