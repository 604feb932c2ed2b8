"""Configuration system for bytering."""

from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path

import tomlkit


@dataclass
class ScanConfig:
    """Stream scanning configuration."""

    read_size: int = 64 * 1024  # Bytes read from the source per chunk
    max_matches: int = 0  # Stop after N matches (0 = unlimited)
    context_bytes: int = 16  # Bytes of surrounding context shown per match


@dataclass
class SystemConfig:
    """Logging and housekeeping configuration."""

    # Log file rotation
    log_max_bytes: int = 5 * 1024 * 1024  # Max log file size (5MB)
    log_backup_count: int = 3  # Number of backup log files to keep


def _dataclass_to_table(obj: object) -> tomlkit.items.Table:
    """Convert a dataclass instance to a tomlkit Table recursively."""
    table = tomlkit.table()
    for f in fields(obj):  # type: ignore[arg-type]
        value = getattr(obj, f.name)
        if is_dataclass(value) and not isinstance(value, type):
            table.add(f.name, _dataclass_to_table(value))
        else:
            table.add(f.name, value)
    return table


@dataclass
class Config:
    """Main configuration container."""

    scan: ScanConfig = field(default_factory=ScanConfig)
    system: SystemConfig = field(default_factory=SystemConfig)

    @property
    def config_dir(self) -> Path:
        """Configuration directory."""
        return Path.home() / ".config" / "bytering"

    @property
    def config_path(self) -> Path:
        """Path to config file."""
        return self.config_dir / "config.toml"

    @property
    def state_dir(self) -> Path:
        """State directory for logs."""
        return Path.home() / ".local" / "state" / "bytering"

    @property
    def log_path(self) -> Path:
        """Scan log path (JSON Lines)."""
        return self.state_dir / "scan.log"

    def save(self, path: Path | None = None) -> None:
        """Save config to TOML file."""
        path = path or self.config_path
        path.parent.mkdir(parents=True, exist_ok=True)

        doc = tomlkit.document()
        for name in ("scan", "system"):
            doc.add(name, _dataclass_to_table(getattr(self, name)))
            doc.add(tomlkit.nl())

        path.write_text(tomlkit.dumps(doc))

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """Load config from TOML file, returning defaults for missing values.

        All defaults come from the dataclass definitions, so Config() and
        Config.load() agree.
        """
        defaults = cls()
        path = path or defaults.config_path
        if not path.exists():
            return defaults

        try:
            with open(path) as f:
                data = tomlkit.load(f)
        except tomlkit.exceptions.TOMLKitError as e:
            raise ValueError(f"Failed to parse config file {path}: {e}") from e

        return cls(
            scan=_load_scan_config(data.get("scan", {})),
            system=_load_system_config(data.get("system", {})),
        )


def _get_int(data: dict, key: str, default: int) -> int:
    """Return an integer setting, rejecting other TOML types (bool included)."""
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    return int(value)


def _load_scan_config(data: dict) -> ScanConfig:
    """Load scan config from TOML data, using dataclass defaults for missing fields."""
    defaults = ScanConfig()

    read_size = _get_int(data, "read_size", defaults.read_size)
    max_matches = _get_int(data, "max_matches", defaults.max_matches)
    context_bytes = _get_int(data, "context_bytes", defaults.context_bytes)

    if read_size < 1:
        raise ValueError(f"read_size must be >= 1, got {read_size}")
    if max_matches < 0:
        raise ValueError(f"max_matches must be >= 0, got {max_matches}")
    if context_bytes < 0:
        raise ValueError(f"context_bytes must be >= 0, got {context_bytes}")

    return ScanConfig(
        read_size=read_size,
        max_matches=max_matches,
        context_bytes=context_bytes,
    )


def _load_system_config(data: dict) -> SystemConfig:
    """Load system config from TOML data."""
    d = SystemConfig()

    log_max_bytes = _get_int(data, "log_max_bytes", d.log_max_bytes)
    log_backup_count = _get_int(data, "log_backup_count", d.log_backup_count)

    if log_max_bytes < 1:
        raise ValueError(f"log_max_bytes must be >= 1, got {log_max_bytes}")
    if log_backup_count < 0:
        raise ValueError(f"log_backup_count must be >= 0, got {log_backup_count}")

    return SystemConfig(log_max_bytes=log_max_bytes, log_backup_count=log_backup_count)
