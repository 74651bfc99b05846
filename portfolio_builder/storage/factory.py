from pathlib import Path

from portfolio_builder.config.settings import Settings
from portfolio_builder.storage.base import BaseStorageProvider
from portfolio_builder.storage.local_adapter import LocalStorageAdapter
from portfolio_builder.storage.s3_adapter import S3StorageAdapter


class StorageProviderFactory:
    """Creates the configured storage backend."""

    SUPPORTED = ("local", "s3")

    @classmethod
    def create(cls, settings: Settings) -> BaseStorageProvider:
        provider = settings.storage_provider.lower()
        if provider == "local":
            return LocalStorageAdapter(
                base_dir=Path(settings.local_storage_dir),
                base_url=settings.local_storage_base_url,
            )
        if provider == "s3":
            if not settings.s3_bucket:
                raise ValueError("s3_bucket is required for storage_provider=s3")
            return S3StorageAdapter(
                bucket=settings.s3_bucket,
                region=settings.s3_region,
                endpoint_url=settings.s3_endpoint_url,
                public_base_url=settings.s3_public_base_url,
                access_key_id=settings.aws_access_key_id,
                secret_access_key=settings.aws_secret_access_key,
            )
        raise ValueError(
            f"Unknown storage provider '{provider}'. Choose from: {list(cls.SUPPORTED)}"
        )
