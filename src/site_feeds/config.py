"""Loading and validation of the feeds configuration file."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import pytz
import yaml

from .core.pipeline import safe_name
from .errors import ConfigError
from .models.site import FeedsConfig, SiteConfig


DEFAULT_CONFIG_PATH = "config.yml"

# YAML key -> (FeedsConfig field, converter)
OPTIONAL_KEYS = {
    "timeout": ("timeout", float),
    "maxWorkers": ("max_workers", int),
    "timezone": ("timezone", str),
    "userAgent": ("user_agent", str),
    "language": ("language", str),
}

# environment variable -> YAML key
ENV_OVERRIDES = {
    "SITE_FEEDS_OUTPUT_DIR": "outputDir",
    "SITE_FEEDS_TIMEOUT": "timeout",
    "SITE_FEEDS_MAX_WORKERS": "maxWorkers",
    "TIMEZONE": "timezone",
}


def read_config_file(config_path) -> Dict[str, Any]:
    """Read the YAML configuration file.

    Raises:
        ConfigError: If the file is missing, unreadable or not a YAML mapping
    """
    path = Path(config_path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {path}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping")
    return data


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collect configuration values set through environment variables."""
    environ = os.environ if environ is None else environ
    return {
        key: environ[variable]
        for variable, key in ENV_OVERRIDES.items()
        if environ.get(variable)
    }


def build_config(data: Mapping[str, Any]) -> FeedsConfig:
    """Validate a raw configuration mapping and build a FeedsConfig.

    Args:
        data: Parsed configuration with camelCase keys

    Returns:
        Validated FeedsConfig

    Raises:
        ConfigError: If a required value is missing or invalid
    """
    output_dir = data.get("outputDir")
    if not isinstance(output_dir, str) or not output_dir.strip():
        raise ConfigError("Configuration is missing 'outputDir'")

    raw_sites = data.get("sites")
    if not isinstance(raw_sites, list) or not raw_sites:
        raise ConfigError("Configuration must list at least one site under 'sites'")

    sites = tuple(SiteConfig.from_dict(raw) for raw in raw_sites)

    seen = {}
    for site in sites:
        name = safe_name(site.name)
        if name in seen:
            raise ConfigError(
                f"Sites '{seen[name]}' and '{site.name}' both map to output name '{name}'"
            )
        seen[name] = site.name

    options = {}
    for key, (attribute, convert) in OPTIONAL_KEYS.items():
        if data.get(key) is None:
            continue
        try:
            options[attribute] = convert(data[key])
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid value for '{key}': {data[key]!r}") from e

    if options.get("timeout", 1) <= 0:
        raise ConfigError("'timeout' must be positive")
    if options.get("max_workers", 1) < 1:
        raise ConfigError("'maxWorkers' must be at least 1")
    if "timezone" in options:
        try:
            pytz.timezone(options["timezone"])
        except pytz.UnknownTimeZoneError as e:
            raise ConfigError(f"Unknown timezone: {options['timezone']}") from e

    return FeedsConfig(output_dir=output_dir.strip(), sites=sites, **options)


def load_config(
    config_path=DEFAULT_CONFIG_PATH,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None
) -> FeedsConfig:
    """Load the feeds configuration.

    Precedence is overrides (command line) > environment > file.

    Args:
        config_path: Path to the YAML configuration file
        overrides: Values to apply on top, keyed like the YAML file
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Validated FeedsConfig

    Raises:
        ConfigError: If the configuration cannot be loaded or is invalid
    """
    data = read_config_file(config_path)
    data.update(env_overrides(environ))
    data.update({k: v for k, v in (overrides or {}).items() if v is not None})

    config = build_config(data)
    logging.info(f"Loaded configuration from {config_path} ({len(config.sites)} site(s))")
    return config
