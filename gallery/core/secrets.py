"""
Secrets management with pluggable loading strategies.

File Structure:
    env_files/
    ├── .env_local           # URLs, non-sensitive config (committed)
    ├── .env_prod            # URLs, non-sensitive config (committed)
    ├── .secrets_local       # Passwords, keys (gitignored)
    └── .secrets_prod        # Passwords, keys (gitignored)

Modes:
    - file: Read from {base_path}/.secrets_{env}
    - env: Read from environment variables {PROJECT}_{SECRET_NAME}
    - ssm: AWS Systems Manager parameter store (see secrets_providers)
    - custom: Override `load_secret()` method for Vault, AWS, etc.

Secret names may be parameter-store paths such as ``/project-two/db/username``.
In env mode they are normalised to ``GALLERY_PROJECT_TWO_DB_USERNAME``.

Usage:
    secrets = SecretsLoader(mode="env")
    db_password = secrets.get("/project-two/db/password")

    # Custom mode - subclass and override
    class VaultLoader(SecretsLoader):
        def load_secret(self, name: str) -> str | None:
            return vault_client.read(f"secret/{name}")
"""

import os
import re
from pathlib import Path

from gallery.core.enums import SecretsMode

__all__ = [
    "SecretsLoader",
    "SecretsMode",
    "env_var_name",
]

# Default secrets directory (gallery/env_files relative to this file)
_DEFAULT_SECRETS_DIR = Path(__file__).parent.parent / "env_files"

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")


def env_var_name(project_name: str, name: str) -> str:
    """Environment variable holding ``name``: ``{PROJECT}_{NAME}`` upper-cased."""
    normalized = _NON_ALNUM.sub("_", name).strip("_").upper()
    return f"{project_name.upper()}_{normalized}"


class SecretsLoader:
    """
    Flexible secrets loader with pluggable strategies.

    Override `load_secret()` for custom implementations (Vault, AWS, etc.)
    """

    def __init__(
        self,
        mode: SecretsMode | str = SecretsMode.FILE,
        project_name: str = "gallery",
        env: str | None = None,
        base_path: str | Path | None = None,
    ) -> None:
        """
        Initialize secrets loader.

        Args:
            mode: "file", "env", "ssm" or "custom"
            project_name: Project name for env var prefix
            env: Environment (local, dev, prod). Auto-detected from ENV var if None.
            base_path: Secrets directory. Default: gallery/env_files (local) or /etc/{project_name} (prod)
        """
        self.mode = SecretsMode(mode) if isinstance(mode, str) else mode
        self.project_name = project_name
        self.env = env or os.getenv("ENV", "local")

        # Default: gallery/env_files for local, /etc/{project_name} for production
        if base_path:
            self.base_path = Path(base_path)
        elif self.env in ("local", "dev"):
            self.base_path = _DEFAULT_SECRETS_DIR
        else:
            self.base_path = Path(f"/etc/{project_name}")

    @property
    def secrets_file(self) -> Path:
        """Path to secrets file: {base_path}/.secrets_{env}"""
        return Path(self.base_path) / f".secrets_{self.env}"

    def get(self, name: str, default: str | None = None, *, decrypt: bool = False) -> str:
        """
        Get a secret value.

        Args:
            name: Secret name (e.g., "/project-two/db/password")
            default: Default value if not found
            decrypt: Ask the backing store to decrypt the value (ssm only)

        Returns:
            Secret value or default

        Raises:
            ValueError: If secret not found and no default provided
        """
        value = self._load(name, decrypt)

        if value is not None:
            return value

        if default is not None:
            return default

        raise ValueError(self._error_message(name))

    def _load(self, name: str, decrypt: bool) -> str | None:
        """Load secret based on current mode."""
        if self.mode == SecretsMode.FILE:
            return self._load_from_file(name)
        if self.mode == SecretsMode.ENV:
            return self._load_from_env(name)
        return self.load_secret(name, decrypt=decrypt)

    def _load_from_file(self, name: str) -> str | None:
        """Load secret from .secrets_{env} file (KEY=VALUE format)."""
        if not self.secrets_file.exists():
            return None

        for line in self.secrets_file.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, value = line.split("=", 1)
                if key.strip() == name:
                    return value.strip().strip("'\"")

        return None

    def _load_from_env(self, name: str) -> str | None:
        """Load from environment variable: {PROJECT}_{SECRET_NAME}"""
        return os.getenv(env_var_name(self.project_name, name))

    def load_secret(self, name: str, decrypt: bool = False) -> str | None:
        """
        Override this for custom secret loading (Vault, AWS, etc.)

        Example:
            class VaultLoader(SecretsLoader):
                def load_secret(self, name: str, decrypt: bool = False) -> str | None:
                    return vault_client.read(f"secret/{name}")
        """
        msg = (
            "Custom mode requires overriding load_secret() method.\n"
            "Create a subclass and implement load_secret()."
        )
        raise NotImplementedError(msg)

    def _error_message(self, name: str) -> str:
        """Generate helpful error message based on mode."""
        if self.mode == SecretsMode.FILE:
            return (
                f"Required secret '{name}' not found.\n"
                f"  Mode: file\n"
                f"  File: {self.secrets_file}\n"
                f"  Add: {name}=your_value"
            )
        if self.mode == SecretsMode.ENV:
            env_var = env_var_name(self.project_name, name)
            return (
                f"Required secret '{name}' not found.\n"
                f"  Mode: env\n"
                f"  Expected: {env_var}\n"
                f"  Set: export {env_var}=your_value"
            )
        return f"Required secret '{name}' not found in {self.mode.value} loader."
