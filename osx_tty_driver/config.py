from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .credential import DEFAULT_TEMP_PATH
from .marker import DEFAULT_FLAGS, MARKER_NAME

DEFAULT_KEYCHAIN = "/Library/Keychains/System.keychain"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class InstallerConfig:
    target_platform: str = "darwin"
    marker_name: str = MARKER_NAME
    marker_flags: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_FLAGS))
    temp_cert_path: str = DEFAULT_TEMP_PATH
    keychain: str = DEFAULT_KEYCHAIN
    cert_profile: str = "trusted-cert"
    trust_policy: str = "trustRoot"
    use_sudo: bool = True
    # None: resolve the invoking user's home at call time.
    home: Optional[str] = None
    dry_run: bool = False

    def replace(self, **changes: Any) -> "InstallerConfig":
        return dataclasses.replace(self, **changes)


_FIELDS = {f.name for f in dataclasses.fields(InstallerConfig)}


def _flag_value(v: Any) -> str:
    # YAML 1.1 reads bare yes/no as booleans.
    if isinstance(v, bool):
        return "yes" if v else "no"
    return str(v)


def config_from_mapping(raw: Dict[str, Any]) -> InstallerConfig:
    unknown = sorted(set(raw) - _FIELDS)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

    values = dict(raw)
    flags = values.get("marker_flags")
    if flags is not None:
        if not isinstance(flags, dict):
            raise ConfigError("marker_flags must be a mapping")
        values["marker_flags"] = {str(k): _flag_value(v) for k, v in flags.items()}
    for key in ("use_sudo", "dry_run"):
        if key in values and not isinstance(values[key], bool):
            raise ConfigError(f"{key} must be true or false")

    return InstallerConfig(**values)


def load_config(path: Optional[str]) -> InstallerConfig:
    """Defaults, overridden by the YAML file at ``path`` when given."""

    if path is None:
        return InstallerConfig()

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError("config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("PyYAML is required to read the installer config") from e

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config must be a mapping/dict: {p}")

    return config_from_mapping(raw)
