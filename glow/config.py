import dataclasses
import logging
from datetime import tzinfo
from pathlib import Path

import yaml
from dateutil import tz

from .checkin import DEFAULT_CHECK_IN
from .consistency import DEFAULT_WINDOW_DAYS as DEFAULT_CONSISTENCY_WINDOW
from .core.errors import ValidationError
from .core.models import TimeOfDay
from .daily import RECENT_WINDOW_DAYS as DEFAULT_RECENT_WINDOW
from .streaks import BEST_STREAK_HORIZON as DEFAULT_STREAK_HORIZON

logger = logging.getLogger(__name__)

GLOW_DIR = Path.home() / ".glow"
CONFIG_PATH = GLOW_DIR / "config.yaml"
SNAPSHOT_PATH = GLOW_DIR / "snapshot.json"


class Config:
    """Single-instance config manager. Load once, cache in memory."""

    _instance: "Config | None" = None
    _data: dict[str, object]

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._data = {}
            cls._instance._load()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached instance so the next access reloads from disk."""
        cls._instance = None

    def _load(self) -> None:
        if not CONFIG_PATH.exists():
            self._data = {}
            return
        try:
            with CONFIG_PATH.open() as f:
                loaded = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, e)
            loaded = None
        self._data = loaded if isinstance(loaded, dict) else {}

    def _save(self) -> None:
        GLOW_DIR.mkdir(exist_ok=True)
        with CONFIG_PATH.open("w") as f:
            yaml.dump(self._data, f, default_flow_style=False, allow_unicode=True)

    def get(self, key: str, default: object = None) -> object:
        return self._data.get(key, default)

    def set(self, key: str, value: object) -> None:
        """Set config value and persist."""
        self._data[key] = value
        self._save()


def _positive_int(key: str, default: int) -> int:
    val = Config().get(key)
    if val is None:
        return default
    try:
        number = int(val)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        number = 0
    if number <= 0:
        logger.warning("config %s=%r is not a positive integer, using %d", key, val, default)
        return default
    return number


def get_timezone() -> tzinfo:
    """Zone that day boundaries are computed in. Defaults to the system zone."""
    name = Config().get("timezone")
    if not name:
        return tz.tzlocal()
    zone = tz.gettz(str(name))
    if zone is None:
        logger.warning("unknown timezone %r, using system zone", name)
        return tz.tzlocal()
    return zone


def get_default_check_in() -> TimeOfDay:
    val = Config().get("check_in_default")
    if not val:
        return DEFAULT_CHECK_IN
    try:
        return TimeOfDay.parse(str(val))
    except ValidationError as e:
        logger.warning("%s, using %s", e, DEFAULT_CHECK_IN)
        return DEFAULT_CHECK_IN


def get_consistency_window() -> int:
    return _positive_int("consistency_window", DEFAULT_CONSISTENCY_WINDOW)


def get_recent_window() -> int:
    return _positive_int("recent_window", DEFAULT_RECENT_WINDOW)


def get_streak_horizon() -> int:
    return _positive_int("streak_horizon", DEFAULT_STREAK_HORIZON)


def get_snapshot_path() -> Path:
    val = Config().get("snapshot_path")
    return Path(str(val)).expanduser() if val else SNAPSHOT_PATH


def set_timezone(name: str) -> None:
    if tz.gettz(name) is None:
        raise ValidationError(f"unknown timezone '{name}'")
    Config().set("timezone", name)


@dataclasses.dataclass(frozen=True)
class EngineSettings:
    check_in_default: TimeOfDay = DEFAULT_CHECK_IN
    consistency_window: int = DEFAULT_CONSISTENCY_WINDOW
    recent_window: int = DEFAULT_RECENT_WINDOW
    streak_horizon: int = DEFAULT_STREAK_HORIZON


def load_settings() -> EngineSettings:
    return EngineSettings(
        check_in_default=get_default_check_in(),
        consistency_window=get_consistency_window(),
        recent_window=get_recent_window(),
        streak_horizon=get_streak_horizon(),
    )
