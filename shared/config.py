"""
CyberSecure Toolkit Configuration Management
=============================================

Centralized configuration for the toolkit using Python dataclasses and
TOML-based persistence.

Every section has working defaults, so the toolkit runs without any
configuration file at all.  A ``config.toml`` in the project root (or a
file passed with ``--config``) overrides individual keys.

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# ---------------------------------------------------------------------------
# Default configuration file path relative to the project root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "config.toml"


# ========================== Tool-Specific Configs ==========================


@dataclass(frozen=False, slots=True)
class PasswordConfig:
    """Settings for the password generator.

    ``min_length`` / ``max_length`` bound the CLI option only; the
    generator itself accepts any length.
    """

    default_length: int = 16
    min_length: int = 4
    max_length: int = 32
    uppercase: bool = True
    lowercase: bool = True
    digits: bool = True
    symbols: bool = True
    secure_random: bool = False


@dataclass(frozen=False, slots=True)
class NetworkConfig:
    """HTTP client parameters used by the breach and status collectors."""

    timeout: float = 10.0
    max_retries: int = 0
    backoff_base: float = 0.5
    backoff_max: float = 5.0
    user_agent: str = "CyberSecureToolkit/1.0"


@dataclass(frozen=False, slots=True)
class BreachConfig:
    """Breach lookup settings.

    Reference:
        Hunt, T. Have I Been Pwned API v3.
        https://haveibeenpwned.com/API/v3
    """

    live_lookup: bool = True
    api_base: str = "https://haveibeenpwned.com/api/v3"
    api_key: str = ""


@dataclass(frozen=False, slots=True)
class StatusConfig:
    """Website reachability check settings."""

    live_check: bool = True
    status_api_url: str = "https://isitdownrightnow.com/api.php"


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Global settings: logging verbosity, output directory, version."""

    log_level: str = "WARNING"
    log_file: str = ""
    log_json: bool = False
    output_dir: str = "output"
    debug: bool = False
    version: str = "1.0.0"


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class ToolkitConfig:
    """Master configuration aggregating all sections.

    Usage:
        >>> config = ToolkitConfig.load()                  # from default path
        >>> config = ToolkitConfig.load("custom.toml")     # from custom path
        >>> config.password.default_length
        16
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    password: PasswordConfig = field(default_factory=PasswordConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)
    breach: BreachConfig = field(default_factory=BreachConfig)
    status: StatusConfig = field(default_factory=StatusConfig)

    # ------------------------------------------------------------------ #
    #  TOML Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path | None = None) -> ToolkitConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``config.toml`` in the
        project root.  Missing keys fall back to dataclass defaults.

        Args:
            path: Filesystem path to a TOML configuration file.

        Returns:
            A fully-populated :class:`ToolkitConfig` instance.

        Raises:
            FileNotFoundError: If the specified path does not exist
                *and* was explicitly provided by the caller.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            password=cls._build_section(PasswordConfig, raw.get("password", {})),
            network=cls._build_section(NetworkConfig, raw.get("network", {})),
            breach=cls._build_section(BreachConfig, raw.get("breach", {})),
            status=cls._build_section(StatusConfig, raw.get("status", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise the entire configuration tree to a plain dictionary."""
        return asdict(self)

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares.

        Unknown keys in the TOML source are silently ignored so that
        forward-compatible config files do not break older code.
        """
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)
