"""
AWS boundary: S3 presigned uploads.
"""

from ecocycle.boundary.aws.s3_client import PresignedUpload, S3UploadClient, build_object_key

__all__ = ["PresignedUpload", "S3UploadClient", "build_object_key"]
