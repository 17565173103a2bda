"""Tests for StorageConfig and CA-derived key prefixes."""

import pytest

from acmevault.config import StorageConfig, prefix_for_ca
from acmevault.errors import ConfigurationError

CA_URL = "https://acme-v02.api.letsencrypt.org/directory"


class TestPrefixForCA:
    def test_uses_host(self) -> None:
        assert prefix_for_ca(CA_URL) == "acme/acme-v02.api.letsencrypt.org"

    def test_keeps_explicit_port(self) -> None:
        assert prefix_for_ca("https://localhost:14000/dir") == "acme/localhost:14000"

    def test_default_port_kept_as_written(self) -> None:
        assert prefix_for_ca("https://CA.Example.org:443/directory") == "acme/CA.Example.org:443"

    def test_host_case_preserved(self) -> None:
        assert prefix_for_ca("https://CA.Example.org/directory") == "acme/CA.Example.org"

    def test_userinfo_dropped(self) -> None:
        assert prefix_for_ca("https://user:pw@ca.example.org/dir") == "acme/ca.example.org"

    def test_ipv6_host(self) -> None:
        assert prefix_for_ca("https://[::1]:14000/dir") == "acme/[::1]:14000"

    def test_invalid_url_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="invalid CA URL"):
            prefix_for_ca("https://[::1/dir")

    def test_s3_style_url(self) -> None:
        assert prefix_for_ca("s3://my-bucket/abc123") == "acme/my-bucket"

    def test_no_host_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="no host"):
            prefix_for_ca("/directory")


class TestFromEnv:
    def test_bucket_only(self) -> None:
        config = StorageConfig.from_env(CA_URL, {"ACMEVAULT_S3_BUCKET": "certs"})
        assert config == StorageConfig(
            bucket="certs",
            prefix="acme/acme-v02.api.letsencrypt.org",
            region="us-east-1",
            endpoint_url=None,
        )

    def test_region_and_endpoint(self) -> None:
        config = StorageConfig.from_env(CA_URL, {
            "ACMEVAULT_S3_BUCKET": "certs",
            "ACMEVAULT_S3_REGION": "eu-central-1",
            "ACMEVAULT_S3_ENDPOINT_URL": "http://minio:9000",
        })
        assert config.region == "eu-central-1"
        assert config.endpoint_url == "http://minio:9000"

    @pytest.mark.parametrize("env", [{}, {"ACMEVAULT_S3_BUCKET": "  "}])
    def test_missing_bucket_raises(self, env: dict[str, str]) -> None:
        with pytest.raises(ConfigurationError, match="ACMEVAULT_S3_BUCKET not set"):
            StorageConfig.from_env(CA_URL, env)

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ACMEVAULT_S3_BUCKET", "from-env")
        monkeypatch.delenv("ACMEVAULT_S3_REGION", raising=False)
        assert StorageConfig.from_env(CA_URL).bucket == "from-env"

    def test_is_frozen(self) -> None:
        config = StorageConfig(bucket="b", prefix="p")
        with pytest.raises(AttributeError):
            config.bucket = "other"  # type: ignore[misc]
