"""
CredHub Configuration

Connection settings and token material for the CredHub client, loaded from
the JSON config file and overridden by environment variables.
"""
import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional

from credhub.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


def default_config_path() -> Path:
    """Location of the config file (``$CREDHUB_CONFIG_DIR`` or ``~/.credhub``)."""
    config_dir = os.getenv("CREDHUB_CONFIG_DIR")
    if config_dir:
        return Path(config_dir) / CONFIG_FILENAME
    return Path.home() / ".credhub" / CONFIG_FILENAME


@dataclass
class CredHubConfig:
    """CredHub connection configuration."""

    api_url: str = ""  # CredHub server base URL (e.g., "https://credhub.example.com:8844")
    auth_url: str = ""  # UAA base URL used for token grants
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    client_id: str = "credhub_cli"
    client_secret: str = ""
    environment: str = "default"  # Name of the target environment, for logs and output

    # Connection settings
    timeout: int = 30
    verify: bool = True  # Verify SSL certificates

    @classmethod
    def from_env(cls) -> "CredHubConfig":
        """Create CredHubConfig from environment variables."""
        return cls()._apply_env()

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "CredHubConfig":
        """
        Load config from the JSON config file, then apply environment overrides.

        Args:
            path: Config file path (defaults to ``default_config_path()``)

        Returns:
            CredHubConfig; defaults if the file does not exist

        Raises:
            ConfigError: If the file exists but cannot be read or parsed
        """
        path = path or default_config_path()
        config = cls()

        if path.exists():
            try:
                data = json.loads(path.read_text())
            except (OSError, ValueError) as e:
                raise ConfigError(f"Failed to read config file {path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(f"Config file {path} must contain a JSON object")

            known = {f.name for f in fields(cls)}
            config = cls(**{key: value for key, value in data.items() if key in known})
            logger.debug(f"Loaded config from {path}")

        return config._apply_env()

    def save(self, path: Optional[Path] = None) -> Path:
        """Write config to the JSON config file (readable by the owner only)."""
        path = path or default_config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w") as f:
            f.write(json.dumps(asdict(self), indent=2))
        # O_CREAT mode only applies to new files
        path.chmod(0o600)
        logger.debug(f"Saved config to {path}")
        return path

    def validate(self) -> list[str]:
        """Check the settings needed to talk to CredHub. Returns a list of problems."""
        problems = []
        if not self.api_url:
            problems.append("API URL is not set")
        if self.timeout <= 0:
            problems.append("timeout must be positive")
        return problems

    def _apply_env(self) -> "CredHubConfig":
        if api_url := os.getenv("CREDHUB_SERVER"):
            self.api_url = api_url
        if auth_url := os.getenv("CREDHUB_AUTH_URL"):
            self.auth_url = auth_url
        if client_id := os.getenv("CREDHUB_CLIENT"):
            self.client_id = client_id
        if client_secret := os.getenv("CREDHUB_SECRET"):
            self.client_secret = client_secret
        if environment := os.getenv("CREDHUB_ENVIRONMENT"):
            self.environment = environment
        if timeout := os.getenv("CREDHUB_TIMEOUT"):
            try:
                self.timeout = int(timeout)
            except ValueError as e:
                raise ConfigError(f"CREDHUB_TIMEOUT must be an integer: {timeout}") from e
        if verify := os.getenv("CREDHUB_VERIFY"):
            self.verify = verify.lower() == "true"
        return self
