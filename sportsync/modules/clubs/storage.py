"""Club logo storage: Supabase Storage by default, S3 when AWS credentials are configured."""
import logging
from typing import Optional, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from supabase import Client

from sportsync.config import settings

logger = logging.getLogger(__name__)


class AssetStoreError(Exception):
    pass


class AssetStore(Protocol):
    def upload(self, path: str, content: bytes, content_type: str) -> str: ...

    def get_public_url(self, path: str) -> str: ...


class SupabaseAssetStore:
    def __init__(self, supabase: Client, bucket_name: Optional[str] = None):
        self.supabase = supabase
        self.bucket_name = bucket_name or settings.club_logo_bucket

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Upload to the bucket and return the stored object's path."""
        try:
            response = self.supabase.storage.from_(self.bucket_name).upload(
                path, content, {"content-type": content_type}
            )
        except Exception as e:
            logger.error(f"Supabase Storage upload failed ({path}): {str(e)}")
            raise AssetStoreError(str(e)) from e
        return getattr(response, "path", None) or path

    def get_public_url(self, path: str) -> str:
        try:
            url = self.supabase.storage.from_(self.bucket_name).get_public_url(path)
        except Exception as e:
            raise AssetStoreError(str(e)) from e
        if not url:
            raise AssetStoreError(f"No public URL for {path}")
        return url


class S3AssetStore:
    def __init__(self):
        if not settings.s3_configured:
            raise ValueError("AWS S3 credentials and bucket name must be configured")

        self.s3_client = boto3.client(
            's3',
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region_name=settings.aws_region
        )
        self.bucket_name = settings.s3_bucket_name

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=path,
                Body=content,
                ContentType=content_type
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to upload file to S3: {str(e)}")
            raise AssetStoreError(str(e)) from e
        return path

    def get_public_url(self, path: str) -> str:
        if settings.s3_public_base_url:
            return f"{settings.s3_public_base_url.rstrip('/')}/{path}"
        return f"https://{self.bucket_name}.s3.{settings.aws_region}.amazonaws.com/{path}"


def get_asset_store(supabase: Client) -> AssetStore:
    """S3 if fully configured, otherwise the Supabase bucket."""
    if settings.s3_configured:
        try:
            return S3AssetStore()
        except Exception as e:
            logger.warning(f"S3 storage initialization failed ({str(e)}), will use Supabase Storage")
    return SupabaseAssetStore(supabase)
