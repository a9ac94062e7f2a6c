"""Enumeration definitions for the gallery."""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    LOCAL = "local"
    DEV = "dev"
    UAT = "uat"
    PREPROD = "preprod"
    PROD = "prod"


class SecretsMode(str, Enum):
    """Secret loading modes."""

    FILE = "file"  # Load from secrets file
    ENV = "env"  # Load from environment variables
    SSM = "ssm"  # AWS Systems Manager parameter store
    CUSTOM = "custom"  # User-provided loader
