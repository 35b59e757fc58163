"""Connection configuration for the NetSuite client.

Settings are layered, later sources overriding earlier ones:

1. built-in defaults
2. ``config/default.toml``  (optional, ``[netsuite]`` table)
3. ``config/local.toml``    (optional, ``[netsuite]`` table)
4. a ``.env`` file in the working directory
5. ``NETSUITE_*`` environment variables

Usage:
    from netsuite_client.config import load_config

    config = load_config()
    print(config.base_url)
"""

import logging
import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Type, Union

from pydantic import ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from .exceptions import NetSuiteConfigError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://rest.na1.netsuite.com"
CONFIG_FILES = ("default.toml", "local.toml")

# Directory searched for CONFIG_FILES; unset outside load_config()
_config_dir: ContextVar[Optional[Path]] = ContextVar("netsuite_config_dir", default=None)


class NetSuiteTomlSource(TomlConfigSettingsSource):
    """TOML source that reads only the ``[netsuite]`` table of each file."""

    def _read_file(self, file_path: Path) -> Dict[str, Any]:
        try:
            data = super()._read_file(file_path)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise NetSuiteConfigError(f"Failed to read config file {file_path}: {exc}") from exc

        section = data.get("netsuite", {})
        if not isinstance(section, dict):
            raise NetSuiteConfigError(f"[netsuite] in {file_path} must be a table")
        logger.debug("Loaded config file %s", file_path)
        return section


class ConnectionConfig(BaseSettings):
    """Credentials and endpoint for one NetSuite account.

    Attributes:
        account_id: NetSuite account identifier
        consumer_key: Integration consumer key (sent as the bearer credential)
        consumer_secret: Integration consumer secret
        token_id: Access token ID
        token_secret: Access token secret
        base_url: REST host, e.g. https://rest.na1.netsuite.com
    """

    model_config = SettingsConfigDict(
        env_prefix="NETSUITE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    account_id: str = ""
    consumer_key: str = ""
    consumer_secret: str = ""
    token_id: str = ""
    token_secret: str = ""
    base_url: str = DEFAULT_BASE_URL

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # Highest precedence first
        config_dir = _config_dir.get()
        toml_files = [config_dir / name for name in CONFIG_FILES] if config_dir else None
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            NetSuiteTomlSource(settings_cls, toml_file=toml_files),
        )

    def __repr__(self) -> str:
        # Keep secrets out of logs and tracebacks
        return (
            f"ConnectionConfig(account_id={self.account_id!r}, "
            f"base_url={self.base_url!r})"
        )


def load_config(config_dir: Union[str, Path] = "config") -> ConnectionConfig:
    """Load configuration from TOML files, ``.env`` and the environment.

    Args:
        config_dir: Directory holding default.toml / local.toml

    Returns:
        ConnectionConfig

    Raises:
        NetSuiteConfigError: A config file is malformed or holds bad values
    """
    token = _config_dir.set(Path(config_dir))
    try:
        return ConnectionConfig()
    except ValidationError as exc:
        raise NetSuiteConfigError(f"Invalid NetSuite configuration: {exc}") from exc
    finally:
        _config_dir.reset(token)
