from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

import yaml  # from pyyaml

from collectors.sys_net import SOURCE_ROOT
from core.errors import ConfigError

ICON_WIRED = "\U000f06f3"
ICON_WIRELESS = "\uf1eb"

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class Config:
    sample_interval_sec: float = 1.0
    bus_timeout_sec: float = 5.0
    read_timeout_sec: float = 2.0
    sysfs_root: str = SOURCE_ROOT
    icons: Dict[str, str] = field(default_factory=lambda: {"wired": ICON_WIRED, "wireless": ICON_WIRELESS})

def default_config_path(env: Mapping[str, str] | None = None) -> str:
    """
    Location of the config file: $NETSTATUS_CONFIG, else
    $XDG_CONFIG_HOME/netstatus/config.yml (~/.config when unset).
    """
    env = os.environ if env is None else env
    if env.get("NETSTATUS_CONFIG"):
        return env["NETSTATUS_CONFIG"]
    base = env.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return os.path.join(base, "netstatus", "config.yml")

def _positive(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number, got {value!r}") from None
    if v <= 0:
        raise ConfigError(f"{name} must be positive, got {value!r}")
    return v

def load_config(path: str | None = None, env: Mapping[str, str] | None = None) -> Config:
    """
    Load configuration from YAML file and override with environment variables.
    
    Environment variables override YAML values:
    - NETSTATUS_SAMPLE_INTERVAL: Seconds between the two counter samples (e.g., 1.0)
    - NETSTATUS_BUS_TIMEOUT: Reply timeout for each bus property read
    - NETSTATUS_READ_TIMEOUT: Timeout for each statistics file read
    - NETSTATUS_SYSFS_ROOT: Directory holding per-interface statistics (e.g., /sys/class/net)
    
    A missing file is not an error; every key has a default.
    
    Args:
        path: Path to the YAML configuration file
        env: Environment mapping (os.environ when omitted)
        
    Returns:
        Config merged from defaults, file and environment
        
    Raises:
        ConfigError: unparsable YAML, a non-mapping document, or an invalid value
    """
    env = os.environ if env is None else env
    path = path or default_config_path(env)

    # load configuration from yaml
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.debug("Config file %s not found, using defaults", path)
        raw = {}
    except OSError as e:
        raise ConfigError(f"cannot read config {path}: {e.strerror or e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"config {path} must be a mapping, got {type(raw).__name__}")

    # check for environment variables
    overrides = {
        "NETSTATUS_SAMPLE_INTERVAL": "sample_interval_sec",
        "NETSTATUS_BUS_TIMEOUT": "bus_timeout_sec",
        "NETSTATUS_READ_TIMEOUT": "read_timeout_sec",
        "NETSTATUS_SYSFS_ROOT": "sysfs_root",
    }
    for var, key in overrides.items():
        if var in env:
            raw[key] = env[var]

    defaults = Config()
    icons = dict(defaults.icons)
    raw_icons = raw.get("icons") or {}
    if not isinstance(raw_icons, dict):
        raise ConfigError("icons must be a mapping with 'wired' and/or 'wireless'")
    for kind in ("wired", "wireless"):
        if kind in raw_icons:
            icons[kind] = str(raw_icons[kind])

    unknown = set(raw) - {"sample_interval_sec", "bus_timeout_sec", "read_timeout_sec", "sysfs_root", "icons"}
    if unknown:
        logger.debug("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))

    return Config(
        sample_interval_sec=_positive("sample_interval_sec", raw.get("sample_interval_sec", defaults.sample_interval_sec)),
        bus_timeout_sec=_positive("bus_timeout_sec", raw.get("bus_timeout_sec", defaults.bus_timeout_sec)),
        read_timeout_sec=_positive("read_timeout_sec", raw.get("read_timeout_sec", defaults.read_timeout_sec)),
        sysfs_root=str(raw.get("sysfs_root", defaults.sysfs_root)),
        icons=icons,
    )
