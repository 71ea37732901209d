"""Tally settings: where the ledger database, logs and CSV exports live.

Settings are read from ~/.config/tally.toml. The first run writes that file
with default values so it can be edited by hand.
"""

from pathlib import Path
from dataclasses import dataclass
import tomllib
import tomli_w


@dataclass
class Config:
    """Paths and options for one ledger."""

    base_dir: Path
    db_data_dir: Path
    db_filename: str
    log_level: str
    log_dir: Path
    export_dir: Path
    recent_limit: int = 50

    @property
    def db_path(self) -> Path:
        """SQLite file holding categories and transactions."""
        return self.db_data_dir / self.db_filename

    @classmethod
    def default(cls) -> "Config":
        """Settings rooted at ~/data/tally."""
        home = Path.home()
        base_dir = home / "data" / "tally"
        return cls(
            base_dir=base_dir,
            db_data_dir=base_dir / "db",
            db_filename="tally.db",
            log_level="INFO",
            log_dir=base_dir / "logs",
            export_dir=base_dir / "exports",
            recent_limit=50,
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "tally.toml"


def get_migrations_dir() -> Path:
    """Directory of ordered SQL schema files shipped with the code."""
    return Path(__file__).parent / "db" / "migrations"


def get_seed_file() -> Path:
    """Get the path to the default categories seed file."""
    return Path(__file__).parent / "db" / "seed" / "categories.json"


def load_config() -> Config:
    """Load settings, writing a default settings file on first run.

    Keys missing from the file fall back to the defaults of Config.default().

    Returns:
        Config for the ledger.
    """
    config_path = get_config_path()

    if not config_path.exists():
        config = Config.default()
        _write_config(config)
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    base_dir = Path(data.get("base_dir", Path.home() / "data" / "tally"))

    db_config = data.get("database", {})
    db_data_dir = Path(db_config.get("data_dir", base_dir / "db"))
    db_filename = db_config.get("filename", "tally.db")

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    export_config = data.get("export", {})
    export_dir = Path(export_config.get("export_dir", base_dir / "exports"))

    ledger_config = data.get("ledger", {})
    recent_limit = int(ledger_config.get("recent_limit", 50))

    return Config(
        base_dir=base_dir,
        db_data_dir=db_data_dir,
        db_filename=db_filename,
        log_level=log_level,
        log_dir=log_dir,
        export_dir=export_dir,
        recent_limit=recent_limit,
    )


def _write_config(config: Config) -> None:
    """Save settings as TOML, one table per concern."""
    config_path = get_config_path()
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
        },
        "ledger": {
            "recent_limit": config.recent_limit,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
