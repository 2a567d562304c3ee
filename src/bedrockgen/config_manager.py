"""User defaults for generation commands.

Defaults live in ~/.bedrockgen/config.toml (or a file passed with --config):

    default_ring_branches = ["master", "qa"]
    default_variable_groups = ["my-vg"]
    maintainer_name = "Jane Doe"
    maintainer_email = "jane@example.com"
    k8s_backend_port = 80

Values given on the command line always win over the file, and the file
wins over built-in defaults. The file is read with tomli and written with
tomlkit so comments survive `bedrockgen config set`.

Security:
- Config directory 0700, config file 0600
- Writes go through a temporary file renamed over the target
"""

import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomli
except ImportError as e:
    raise ImportError("tomli library not available. Install with: pip install tomli") from e

try:
    import tomlkit
    from tomlkit.exceptions import TOMLKitError
except ImportError as e:
    raise ImportError("tomlkit library not available. Install with: pip install tomlkit") from e

from bedrockgen.constants import (
    DEFAULT_K8S_BACKEND_PORT,
    DEFAULT_MAINTAINER_EMAIL,
    DEFAULT_MAINTAINER_NAME,
    DEFAULT_RING_BRANCHES,
)

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when the config file cannot be read or written."""

    pass


@dataclass
class GeneratorConfig:
    """Generation defaults."""

    default_ring_branches: list[str] = field(default_factory=lambda: list(DEFAULT_RING_BRANCHES))
    default_variable_groups: list[str] = field(default_factory=list)
    maintainer_name: str | None = None
    maintainer_email: str | None = None
    k8s_backend_port: int = DEFAULT_K8S_BACKEND_PORT

    def to_dict(self) -> dict[str, Any]:
        # TOML has no null
        return {key: value for key, value in asdict(self).items() if value is not None}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GeneratorConfig":
        return cls(
            default_ring_branches=list(data.get("default_ring_branches", DEFAULT_RING_BRANCHES)),
            default_variable_groups=list(data.get("default_variable_groups", [])),
            maintainer_name=data.get("maintainer_name"),
            maintainer_email=data.get("maintainer_email"),
            k8s_backend_port=int(data.get("k8s_backend_port", DEFAULT_K8S_BACKEND_PORT)),
        )


class ConfigManager:
    """Read and write the bedrockgen config file."""

    DEFAULT_CONFIG_DIR = Path.home() / ".bedrockgen"
    DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

    @classmethod
    def get_config_path(cls, custom_path: str | None = None) -> Path:
        """Config file to read.

        Raises:
            ConfigError: If custom_path is given and does not exist
        """
        if not custom_path:
            return cls.DEFAULT_CONFIG_FILE

        path = Path(custom_path).expanduser().resolve()
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        return path

    @classmethod
    def ensure_config_dir(cls) -> Path:
        """Create ~/.bedrockgen (mode 0700) if needed.

        Raises:
            ConfigError: If the directory cannot be created
        """
        try:
            cls.DEFAULT_CONFIG_DIR.mkdir(parents=True, exist_ok=True)
            os.chmod(cls.DEFAULT_CONFIG_DIR, 0o700)
        except OSError as e:
            raise ConfigError(f"Failed to create config directory: {e}") from e
        return cls.DEFAULT_CONFIG_DIR

    @classmethod
    def load_config(cls, custom_path: str | None = None) -> GeneratorConfig:
        """Load defaults, or built-in defaults when no config file exists.

        Raises:
            ConfigError: If the file is unreadable or not valid TOML
        """
        config_path = cls.get_config_path(custom_path)
        if not config_path.exists():
            logger.debug(f"No config at {config_path}, using built-in defaults")
            return GeneratorConfig()

        try:
            with open(config_path, "rb") as f:
                config = GeneratorConfig.from_dict(tomli.load(f))
        except (OSError, tomli.TOMLDecodeError, TypeError, ValueError) as e:
            raise ConfigError(f"Failed to load config: {e}") from e

        logger.debug(f"Loaded config from {config_path}")
        return config

    @classmethod
    def _target_path(cls, custom_path: str | None) -> Path:
        if custom_path:
            path = Path(custom_path).expanduser().resolve()
            path.parent.mkdir(parents=True, exist_ok=True)
            return path
        cls.ensure_config_dir()
        return cls.DEFAULT_CONFIG_FILE

    @classmethod
    def save_config(cls, config: GeneratorConfig, custom_path: str | None = None) -> None:
        """Write defaults, keeping comments of an existing file.

        Raises:
            ConfigError: If the file cannot be written
        """
        temp_path: Path | None = None
        try:
            config_path = cls._target_path(custom_path)
            temp_path = config_path.with_suffix(".tmp")

            if config_path.exists():
                doc = tomlkit.parse(config_path.read_text(encoding="utf-8"))
            else:
                doc = tomlkit.document()
            doc.update(config.to_dict())

            temp_path.write_text(tomlkit.dumps(doc), encoding="utf-8")
            os.chmod(temp_path, 0o600)
            temp_path.replace(config_path)
        except (OSError, TOMLKitError) as e:
            if temp_path is not None and temp_path.exists():
                temp_path.unlink()
            raise ConfigError(f"Failed to save config: {e}") from e

        logger.debug(f"Saved config to {config_path}")

    @classmethod
    def update_config(cls, custom_path: str | None = None, **updates: Any) -> GeneratorConfig:
        """Change the given fields and save. Unknown fields are ignored with a warning.

        A custom config file that does not exist yet is created from the defaults.
        """
        if custom_path and not Path(custom_path).expanduser().exists():
            logger.debug(f"Creating config file {custom_path}")
            config = GeneratorConfig()
        else:
            config = cls.load_config(custom_path)
        for key, value in updates.items():
            if not hasattr(config, key):
                logger.warning(f"Unknown config key: {key}")
                continue
            setattr(config, key, value)

        cls.save_config(config, custom_path)
        return config

    @classmethod
    def get_ring_branches(
        cls, cli_value: tuple[str, ...] | list[str] | None = None, custom_path: str | None = None
    ) -> list[str]:
        """Trigger branches: CLI value, else config, else master."""
        if cli_value:
            return list(cli_value)
        return list(cls.load_config(custom_path).default_ring_branches)

    @classmethod
    def get_variable_groups(
        cls, cli_value: tuple[str, ...] | list[str] | None = None, custom_path: str | None = None
    ) -> list[str]:
        if cli_value:
            return list(cli_value)
        return list(cls.load_config(custom_path).default_variable_groups)

    @classmethod
    def get_maintainer(
        cls,
        cli_name: str | None = None,
        cli_email: str | None = None,
        custom_path: str | None = None,
    ) -> tuple[str, str]:
        """Maintainer (name, email) for new projects and services.

        Each field falls back to the config file, then to a placeholder.
        """
        if cli_name and cli_email:
            return cli_name, cli_email

        config = cls.load_config(custom_path)
        return (
            cli_name or config.maintainer_name or DEFAULT_MAINTAINER_NAME,
            cli_email or config.maintainer_email or DEFAULT_MAINTAINER_EMAIL,
        )


__all__ = ["ConfigError", "ConfigManager", "GeneratorConfig"]
