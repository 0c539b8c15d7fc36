"""Configuration management for Cash Book.

Reads configuration from ~/.config/cashbook.toml and creates default config if needed.
"""

import logging
from pathlib import Path
from dataclasses import dataclass
from typing import Optional
import tomllib
import tomli_w

from errors import ConfigError

DEFAULT_CURRENCY_SYMBOL = "₹"


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    db_data_dir: Path
    db_filename: str
    log_level: str
    log_dir: Path
    export_dir: Path
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    categories_file: Optional[Path] = None

    @property
    def db_path(self) -> Path:
        """Get the full database path (data_dir/filename)."""
        return self.db_data_dir / self.db_filename

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        return cls.under(Path.home() / "data" / "cashbook")

    @classmethod
    def under(cls, base_dir: Path) -> "Config":
        """Create a Config keeping every directory below base_dir."""
        return cls(
            base_dir=base_dir,
            db_data_dir=base_dir / "db",
            db_filename="cashbook.db",
            log_level="INFO",
            log_dir=base_dir / "logs",
            export_dir=base_dir / "exports",
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "cashbook.toml"


def get_migrations_dir() -> Path:
    """Get the path to the migrations directory.

    This is always relative to the code location, not configurable.
    """
    return Path(__file__).parent / "db" / "migrations"


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Args:
        config_path: Optional explicit config file. Defaults to get_config_path().

    Returns:
        Config object with loaded or default values.

    Raises:
        ConfigError: If the file holds a value the application cannot use.
    """
    config_path = config_path or get_config_path()

    if not config_path.exists():
        config = Config.default()
        _write_config(config, config_path)
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Anything left out of the file falls back to a default below base_dir
    defaults = Config.under(Path(data.get("base_dir", Config.default().base_dir)))

    db_section = data.get("database", {})
    log_section = data.get("logging", {})
    export_section = data.get("export", {})
    categories_file = data.get("categories", {}).get("defaults_file")

    config = Config(
        base_dir=defaults.base_dir,
        db_data_dir=Path(db_section.get("data_dir", defaults.db_data_dir)),
        db_filename=db_section.get("filename", defaults.db_filename),
        log_level=str(log_section.get("level", defaults.log_level)).upper(),
        log_dir=Path(log_section.get("log_dir", defaults.log_dir)),
        export_dir=Path(export_section.get("export_dir", defaults.export_dir)),
        currency_symbol=export_section.get("currency_symbol", DEFAULT_CURRENCY_SYMBOL),
        categories_file=Path(categories_file) if categories_file else None,
    )
    _validate(config, config_path)
    return config


def _validate(config: Config, config_path: Path) -> None:
    if not isinstance(logging.getLevelName(config.log_level), int):
        raise ConfigError(
            f"Unknown log level '{config.log_level}' in {config_path}"
        )
    if not isinstance(config.currency_symbol, str) or not config.currency_symbol.strip():
        raise ConfigError(f"currency_symbol must be a non-empty string in {config_path}")


def _write_config(config: Config, config_path: Path) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
        config_path: Destination TOML file.
    """
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "base_dir": str(config.base_dir),
        "database": {
            "data_dir": str(config.db_data_dir),
            "filename": config.db_filename,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "export": {
            "export_dir": str(config.export_dir),
            "currency_symbol": config.currency_symbol,
        },
    }
    # TOML has no null, so an unset override is simply left out
    if config.categories_file:
        data["categories"] = {"defaults_file": str(config.categories_file)}

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
