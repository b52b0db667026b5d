"""
Environment-sourced configuration for the item lookup function.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from bottlenose.api import SERVICE_DOMAINS

from .error_handling import ConfigurationError

DEFAULT_REGION = "us-east-1"
DEFAULT_DOMAIN = "JP"

# Locales the bottlenose client can sign requests for
SUPPORTED_DOMAINS = frozenset(SERVICE_DOMAINS)

REQUIRED_ENV_VARS = (
    "CACHE_BUCKET",
    "AMAZON_ACCESS_KEY",
    "AMAZON_SECRET_KEY",
    "AMAZON_ASSOCIATE_TAG",
)


@dataclass(frozen=True)
class LookupConfig:
    region: str
    bucket: str
    access_key: str
    secret_key: str
    associate_tag: str
    domain: str = DEFAULT_DOMAIN
    s3_endpoint: Optional[str] = None
    aws_profile: Optional[str] = None
    is_lambda: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LookupConfig":
        """
        Build the configuration for one invocation.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            LookupConfig

        Raises:
            ConfigurationError: If a required variable is missing or the
                domain is not supported
        """
        env = os.environ if environ is None else environ

        missing = [key for key in REQUIRED_ENV_VARS if not env.get(key)]
        if missing:
            raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")

        domain = (env.get("AMAZON_DOMAIN") or DEFAULT_DOMAIN).upper()
        if domain not in SUPPORTED_DOMAINS:
            raise ConfigurationError(f"Unsupported AMAZON_DOMAIN: {domain}")

        return cls(
            region=env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION") or DEFAULT_REGION,
            bucket=env["CACHE_BUCKET"],
            access_key=env["AMAZON_ACCESS_KEY"],
            secret_key=env["AMAZON_SECRET_KEY"],
            associate_tag=env["AMAZON_ASSOCIATE_TAG"],
            domain=domain,
            s3_endpoint=env.get("S3_ENDPOINT") or None,
            aws_profile=env.get("AWS_PROFILE") or env.get("AWS_DEFAULT_PROFILE") or None,
            is_lambda=bool(env.get("LAMBDA_TASK_ROOT")),
        )
