"""
Process-wide configuration access.

The configuration is read and validated on first use and then cached.
Tests and embedding code point the loader at another file with
set_config_path().
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..models.config import AppConfig
from ..validation import ErrorSeverity, handle_config_error
from .loader import load_main_config
from .validators import validate_app_config

logger = logging.getLogger(__name__)

# conf/config.toml at the project root, four levels above this module.
_DEFAULT_CONFIG_FILE_PATH = Path(__file__).parent.parent.parent.parent / "conf" / "config.toml"

_config_file_path = _DEFAULT_CONFIG_FILE_PATH
_cached_config: Optional[AppConfig] = None


def set_config_path(config_path: Path) -> None:
    """Use another config.toml and forget the cached configuration."""
    global _config_file_path, _cached_config
    _config_file_path = Path(config_path)
    _cached_config = None
    logger.info(f"Configuration file: {_config_file_path}")


def clear_config_cache() -> None:
    """Force the next get_config() to read the file again."""
    global _cached_config
    _cached_config = None
    logger.debug("Dropped cached configuration")


def _load_config(config_path: Path) -> AppConfig:
    """
    Read and validate one configuration file.

    An installed package has no `conf/` directory next to it, so a missing
    default file falls back to the built-in defaults. A missing file that
    was explicitly requested is an error.

    Raises:
        FileNotFoundError: If an explicitly set configuration file is missing
        ValidationError: If a value is invalid
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    if config_path == _DEFAULT_CONFIG_FILE_PATH and not config_path.exists():
        logger.warning(f"No configuration at {config_path}, using built-in defaults")
        return AppConfig()

    try:
        app_config = validate_app_config(load_main_config(config_path))
    except FileNotFoundError as e:
        handle_config_error(
            error=e,
            context="locating configuration",
            severity=ErrorSeverity.CRITICAL,
            logger=logger,
        )
        raise
    except Exception as e:
        handle_config_error(error=e, context=f"validating {config_path.name}", logger=logger)
        raise

    logger.info(
        f"Configuration ready: range policy '{app_config.render.range_policy}', "
        f"page size {app_config.render.page_size}, storage '{app_config.storage.format}'"
    )
    return app_config


def get_config() -> AppConfig:
    """Return the cached AppConfig, loading it on first call."""
    global _cached_config
    if _cached_config is None:
        _cached_config = _load_config(_config_file_path)
    return _cached_config


def is_config_loaded() -> bool:
    return _cached_config is not None


def get_config_info() -> Dict[str, Any]:
    """Describe which file is in use and the key settings read from it."""
    render = _cached_config.render if _cached_config else None
    return {
        "config_loaded": is_config_loaded(),
        "config_path": str(_config_file_path),
        "range_policy": render.range_policy if render else None,
        "storage_format": _cached_config.storage.format if _cached_config else None,
    }
