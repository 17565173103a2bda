"""Constants for acmevault key layout and configuration."""

# Key segments under the configured prefix.
DOMAIN_SEGMENT = "domain"
USER_SEGMENT = "user"
RECENT_USER_NAME = "recent"

# Every prefix is "acme/<ca-host>".
PREFIX_ROOT = "acme"

# At-rest encryption requested on every write.
SERVER_SIDE_ENCRYPTION = "AES256"

DEFAULT_REGION = "us-east-1"

# Environment variables read by StorageConfig.from_env().
ENV_BUCKET = "ACMEVAULT_S3_BUCKET"
ENV_REGION = "ACMEVAULT_S3_REGION"
ENV_ENDPOINT_URL = "ACMEVAULT_S3_ENDPOINT_URL"
