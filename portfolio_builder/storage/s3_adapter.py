from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from portfolio_builder.storage.base import BaseStorageProvider
from portfolio_builder.storage.exceptions import StorageError


class S3StorageAdapter(BaseStorageProvider):
    """Stores portfolio files in an S3-compatible bucket with public-read URLs."""

    def __init__(
        self,
        *,
        bucket: str,
        region: str,
        endpoint_url: str | None = None,
        public_base_url: str | None = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        client: Any | None = None,
    ) -> None:
        self._bucket = bucket
        self._region = region
        self._public_base_url = (
            public_base_url or f"https://{bucket}.s3.{region}.amazonaws.com"
        ).rstrip("/")
        self._client = client or boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            config=Config(signature_version="s3v4"),
        )

    def upload_file(
        self,
        path: str,
        content: bytes | str,
        content_type: str | None = None,
    ) -> str:
        body = content.encode("utf-8") if isinstance(content, str) else content
        key = path.lstrip("/")
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=body,
                ContentType=content_type or "text/html",
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"S3 upload of {key} failed: {exc}") from exc
        return self.get_public_url(key)

    def get_public_url(self, path: str) -> str:
        return f"{self._public_base_url}/{path.lstrip('/')}"

    def delete_file(self, path: str) -> None:
        key = path.lstrip("/")
        try:
            self._client.delete_object(Bucket=self._bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"S3 delete of {key} failed: {exc}") from exc

    def name(self) -> str:
        return "S3"

    def is_absolute_url(self) -> bool:
        return True
