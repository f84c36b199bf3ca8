import dataclasses, json, logging
from typing import Optional

from constants import (
    DEFAULT_SPEED, DEFAULT_SPAWN_RATE, TICK_SECONDS,
    FLIGHT_MODE_FREE, ROUTE_MODE_REPLACE, LANDING_MODE_RADIUS,
    FLIGHT_MODES, ROUTE_MODES, LANDING_MODES,
)

log = logging.getLogger(__name__)


@dataclasses.dataclass
class SimConfig:
    flight_mode: str = FLIGHT_MODE_FREE
    route_mode: str = ROUTE_MODE_REPLACE
    landing_mode: str = LANDING_MODE_RADIUS
    speed: float = DEFAULT_SPEED
    spawn_rate: int = DEFAULT_SPAWN_RATE
    tick_seconds: float = TICK_SECONDS
    stop_on_collision: bool = False
    seed: Optional[int] = None

    def validate(self) -> "SimConfig":
        for name, allowed in (
            ("flight_mode", FLIGHT_MODES),
            ("route_mode", ROUTE_MODES),
            ("landing_mode", LANDING_MODES),
        ):
            value = getattr(self, name)
            if value not in allowed:
                raise ValueError(f"{name} must be one of {', '.join(allowed)}, got {value!r}")

        if self.speed <= 0:
            raise ValueError(f"speed must be positive, got {self.speed}")
        if self.spawn_rate < 0:
            raise ValueError(f"spawn_rate must be non-negative, got {self.spawn_rate}")
        if self.tick_seconds <= 0:
            raise ValueError(f"tick_seconds must be positive, got {self.tick_seconds}")
        return self

    @staticmethod
    def load_from_json(path: str) -> Optional["SimConfig"]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            log.warning("Could not read config %s: %s", path, e)
            return None

        if not isinstance(data, dict):
            log.warning("Config %s is not a JSON object", path)
            return None

        known = {f.name for f in dataclasses.fields(SimConfig)}
        unknown = sorted(set(data) - known)
        if unknown:
            log.warning("Ignoring unknown config keys in %s: %s", path, ", ".join(unknown))

        try:
            return SimConfig(**{k: v for k, v in data.items() if k in known}).validate()
        except (TypeError, ValueError) as e:
            log.warning("Invalid config %s: %s", path, e)
            return None
