"""
Secrets loaders backed by AWS services.

To implement your own provider:
    1. Subclass SecretsLoader
    2. Set mode=SecretsMode.CUSTOM
    3. Override load_secret(name, decrypt) -> str | None
"""

from pathlib import Path

import boto3
from botocore.exceptions import ClientError

from gallery.core.enums import SecretsMode
from gallery.core.secrets import SecretsLoader

__all__ = ["SSMParameterStoreLoader", "build_secrets_loader"]


class SSMParameterStoreLoader(SecretsLoader):
    """
    AWS Systems Manager parameter store loader.

    Usage:
        loader = SSMParameterStoreLoader(region="eu-west-1")
        password = loader.get("/project-two/db/password", decrypt=True)
    """

    def __init__(self, region: str = "us-east-1", client=None, **kwargs) -> None:
        super().__init__(mode=SecretsMode.SSM, **kwargs)
        self.region = region
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client("ssm", region_name=self.region)
        return self._client

    def load_secret(self, name: str, decrypt: bool = False) -> str | None:
        """Fetch a single parameter. Missing parameters return None, other errors raise."""
        try:
            response = self.client.get_parameter(Name=name, WithDecryption=decrypt)
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == "ParameterNotFound":
                return None
            raise
        return response["Parameter"]["Value"]


def build_secrets_loader(
    mode: SecretsMode | str,
    region: str = "us-east-1",
    base_path: str | Path | None = None,
) -> SecretsLoader:
    """Create the loader for ``mode``; ``ssm`` gets the parameter store loader."""
    mode = SecretsMode(mode)
    if mode == SecretsMode.SSM:
        return SSMParameterStoreLoader(region=region, base_path=base_path)
    return SecretsLoader(mode=mode, base_path=base_path)
