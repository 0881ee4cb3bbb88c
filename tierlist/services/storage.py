"""Object storage for image blobs (S3 presigned URLs)."""

import logging
import uuid
from dataclasses import dataclass

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from tierlist.config import Settings
from tierlist.domain.result import Result, unexpected

logger = logging.getLogger(__name__)


@dataclass
class UploadTicket:
    """Where the client should PUT the file, and the key to save it under."""

    url: str
    storage_key: uuid.UUID


class ImageStorageService:
    """Hands out presigned URLs and deletes blobs; bytes never pass through the API."""

    def __init__(
        self,
        client,
        bucket_name: str,
        key_prefix: str = "images/",
        upload_expiration: int = 5 * 60 * 60,
        download_expiration: int = 60 * 60,
    ):
        self.client = client
        self.bucket_name = bucket_name
        self.key_prefix = key_prefix
        self.upload_expiration = upload_expiration
        self.download_expiration = download_expiration

    @classmethod
    def from_settings(cls, settings: Settings) -> "ImageStorageService":
        client = boto3.client(
            "s3",
            region_name=settings.s3_region,
            endpoint_url=settings.s3_endpoint_url,
        )
        return cls(
            client,
            bucket_name=settings.s3_bucket_name,
            key_prefix=settings.s3_key_prefix,
            upload_expiration=settings.upload_url_expiration_seconds,
            download_expiration=settings.download_url_expiration_seconds,
        )

    def object_key(self, storage_key: uuid.UUID | str) -> str:
        return f"{self.key_prefix}{storage_key}"

    def get_upload_url(self, file_name: str, content_type: str) -> Result[UploadTicket]:
        """Create a new storage key and a presigned PUT URL for it."""
        storage_key = uuid.uuid4()
        try:
            url = self.client.generate_presigned_url(
                "put_object",
                Params={
                    "Bucket": self.bucket_name,
                    "Key": self.object_key(storage_key),
                    "ContentType": content_type,
                    "Metadata": {"file-name": file_name},
                },
                ExpiresIn=self.upload_expiration,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to create upload URL for {file_name}: {e}")
            return Result.failure(unexpected("Could not create an upload URL."))
        return Result.success(UploadTicket(url=url, storage_key=storage_key))

    def get_download_url(self, storage_key: uuid.UUID | str) -> Result[str]:
        try:
            url = self.client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket_name, "Key": self.object_key(storage_key)},
                ExpiresIn=self.download_expiration,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to create download URL for {storage_key}: {e}")
            return Result.failure(unexpected("Could not create a download URL."))
        return Result.success(url)

    def delete_image(self, storage_key: uuid.UUID | str) -> Result[None]:
        try:
            self.client.delete_object(Bucket=self.bucket_name, Key=self.object_key(storage_key))
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to delete blob {storage_key}: {e}")
            return Result.failure(unexpected("Could not delete the stored image."))
        return Result.success()
