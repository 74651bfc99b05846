from unittest.mock import patch

import pytest

from portfolio_builder.config.settings import Settings
from portfolio_builder.storage.factory import StorageProviderFactory
from portfolio_builder.storage.local_adapter import LocalStorageAdapter
from portfolio_builder.storage.s3_adapter import S3StorageAdapter


def _settings(**overrides: object) -> Settings:
    return Settings(recaptcha_secret_key="s", _env_file=None, **overrides)


class TestStorageProviderFactory:
    def test_local_is_default(self) -> None:
        storage = StorageProviderFactory.create(_settings())
        assert isinstance(storage, LocalStorageAdapter)

    def test_s3(self) -> None:
        with patch("portfolio_builder.storage.s3_adapter.boto3.client") as mock_client:
            storage = StorageProviderFactory.create(
                _settings(storage_provider="s3", s3_bucket="b", s3_region="eu-west-1")
            )
        assert isinstance(storage, S3StorageAdapter)
        assert mock_client.call_args.kwargs["region_name"] == "eu-west-1"

    def test_s3_requires_bucket(self) -> None:
        with pytest.raises(ValueError, match="s3_bucket"):
            StorageProviderFactory.create(_settings(storage_provider="s3"))

    def test_unknown_provider(self) -> None:
        with pytest.raises(ValueError, match="Unknown storage provider"):
            StorageProviderFactory.create(_settings(storage_provider="ftp"))
