from __future__ import annotations
import collections, dataclasses, functools, logging, random
from typing import Callable, Deque, Dict, Optional, Tuple

from atc.config import SimConfig
from atc.conflicts import ConflictReport, detect_conflicts
from atc.landing import check_landing
from atc.motion import move_aircraft
from atc.objects.aircraft import Aircraft, AircraftSnapshot, make_callsign, spawn_aircraft
from atc.objects.airspace import Airspace
from atc.objects.route import Waypoint
from atc.router import assign_waypoint
from atc.scheduler import Scheduler
from atc.utils import heading_deg
from constants import STATE_LANDED, STATE_COLLIDED

log = logging.getLogger(__name__)

TICK_TASK = "tick"
SPAWN_TASK = "spawn"


@dataclasses.dataclass(frozen=True)
class SimulationSnapshot:
    aircraft: Tuple[AircraftSnapshot, ...]
    active_count: int
    landed_count: int
    collision_count: int
    speed: float
    spawn_rate: int
    selected_id: Optional[int]
    game_over: bool = False


def _between_ticks(method: Callable):
    """Operator actions issued mid-tick are queued until the tick finishes."""
    @functools.wraps(method)
    def wrapper(self: "Simulation", *args, **kwargs):
        if self._ticking:
            self._pending.append(functools.partial(method, self, *args, **kwargs))
            return None
        return method(self, *args, **kwargs)
    return wrapper


class Simulation:
    """
    Owns the whole simulation state and drives it.

    Two repeating schedules share one cooperative scheduler: the fixed-step tick and
    spawn admission. Operator entry points mutate state only between ticks.
    """

    def __init__(self, config: Optional[SimConfig] = None, airspace: Optional[Airspace] = None,
                 rng: Optional[random.Random] = None, autostart: bool = True):
        self.config = (config or SimConfig()).validate()
        self.airspace = airspace or Airspace()
        self.rng = rng or random.Random(self.config.seed)
        self.scheduler = Scheduler()

        self.fleet: Dict[int, Aircraft] = {}
        self._pending: Deque[Callable[[], None]] = collections.deque()
        self._ticking = False
        self._clear_state()

        if autostart:
            self.start()

    def _clear_state(self):
        self.fleet.clear()
        self._pending.clear()
        self.aircraft_counter = 0
        self.landed_count = 0
        self.collision_count = 0
        self.selected_id: Optional[int] = None
        self.speed = self.config.speed
        self.spawn_rate = self.config.spawn_rate
        self.ticks = 0
        self.game_over = False

    # --- schedules ---

    def _spawn_interval(self) -> Optional[float]:
        return 60.0 / self.spawn_rate if self.spawn_rate > 0 else None

    def _log_spawn_rate(self):
        interval = self._spawn_interval()
        if interval is None:
            log.info("Spawning paused (rate set to 0).")
        else:
            log.info("Spawning aircraft every %.1f seconds.", interval)

    def start(self):
        self.scheduler.every(TICK_TASK, self.config.tick_seconds, self.tick)
        self.scheduler.every(SPAWN_TASK, self._spawn_interval(), self._scheduled_spawn)
        self.scheduler.start()
        self._log_spawn_rate()
        log.info("Game loop started.")

    def stop(self):
        self.scheduler.stop()

    @property
    def running(self) -> bool:
        return self.scheduler.running

    def advance(self, elapsed: float) -> int:
        """Feed simulated seconds to the scheduler; returns callbacks fired."""
        return self.scheduler.advance(elapsed)

    def _scheduled_spawn(self):
        if not self.game_over:
            self.spawn_one()

    # --- tick driver ---

    def tick(self, dt: Optional[float] = None) -> ConflictReport:
        """Move every aircraft, land the arrivals, then run one proximity scan."""
        if self._ticking:
            raise RuntimeError("tick() is not re-entrant")
        dt = self.config.tick_seconds if dt is None else dt

        self._ticking = True
        try:
            for ac in list(self.fleet.values()):
                reached = move_aircraft(ac, dt, self.speed, self.airspace, self.config.flight_mode)
                if check_landing(ac, self.airspace.runway, self.config.landing_mode, reached):
                    self.land(ac)

            report = detect_conflicts(list(self.fleet.values()))
            if report.collisions:
                self.collision_count += report.collision_count
                self._deselect_collided()
                if self.config.stop_on_collision and not self.game_over:
                    self.game_over = True
                    self.scheduler.stop()
                    log.critical("Game Over due to collision.")
            self.ticks += 1
        finally:
            self._ticking = False

        while self._pending:
            self._pending.popleft()()
        return report

    def land(self, ac: Aircraft) -> bool:
        """Retire an arrived aircraft. Repeat calls for the same aircraft do nothing."""
        if ac.state in (STATE_LANDED, STATE_COLLIDED):
            return False

        ac.state = STATE_LANDED
        self.fleet.pop(ac.id, None)
        if self.selected_id == ac.id:
            self.selected_id = None
        ac.selected = False
        self.landed_count += 1
        log.info("Aircraft %s landed successfully at runway.", ac.callsign)
        return True

    def _deselect_collided(self):
        sel = self.selected
        if sel is not None and sel.state == STATE_COLLIDED:
            sel.selected = False
            self.selected_id = None

    # --- operator entry points ---

    @_between_ticks
    def spawn_one(self) -> Aircraft:
        self.aircraft_counter += 1
        ac = spawn_aircraft(self.aircraft_counter, self.airspace, self.rng, self.config.flight_mode)
        self.fleet[ac.id] = ac
        log.info("Aircraft %s spawned at (%.1f, %.1f) with heading %d°",
                 ac.callsign, ac.x, ac.y, heading_deg(ac.hdg))
        return ac

    @_between_ticks
    def add_aircraft(self, x: float, y: float, hdg: float = 0.0) -> Aircraft:
        """Place an aircraft at an exact position with no route and no free flight."""
        self.aircraft_counter += 1
        ac = Aircraft(self.aircraft_counter, make_callsign(self.aircraft_counter), x, y, hdg)
        self.fleet[ac.id] = ac
        return ac

    @_between_ticks
    def select_aircraft(self, aircraft_id: Optional[int]) -> bool:
        """
        Toggle selection of an aircraft; None clears the selection.

        Unknown, landed and collided aircraft cannot be selected.
        """
        if aircraft_id is None:
            return self._clear_selection()

        ac = self.fleet.get(aircraft_id)
        if ac is None or ac.terminal:
            log.debug("Ignoring selection of unavailable aircraft %s", aircraft_id)
            return False

        prev = self.selected
        if prev is not None and prev.id != ac.id:
            prev.selected = False

        ac.selected = not ac.selected
        if ac.selected:
            self.selected_id = ac.id
            log.info("Aircraft %s selected. Click grid for waypoint.", ac.callsign)
        else:
            self.selected_id = None
            log.info("Aircraft %s deselected.", ac.callsign)
        return True

    def _clear_selection(self) -> bool:
        prev = self.selected
        self.selected_id = None
        if prev is None:
            return False
        prev.selected = False
        return True

    @_between_ticks
    def assign_waypoint(self, aircraft_id: Optional[int], point: Waypoint) -> bool:
        """Route an aircraft to `point`. Only the selected aircraft takes orders."""
        if aircraft_id is None or aircraft_id != self.selected_id:
            log.debug("Aircraft %s is not selected, ignoring waypoint", aircraft_id)
            return False
        return assign_waypoint(self.selected, point, self.airspace, self.config.route_mode)

    @_between_ticks
    def click(self, point: Waypoint) -> bool:
        """Airspace click: route the selected aircraft there, or drop a stale selection."""
        sel = self.selected
        if sel is None or sel.terminal:
            self._clear_selection()
            return False
        return assign_waypoint(sel, point, self.airspace, self.config.route_mode)

    @_between_ticks
    def set_speed(self, speed: float):
        self.speed = speed
        log.info("Speed set to %.1f tiles/sec.", speed)

    @_between_ticks
    def set_spawn_rate(self, rate: int):
        self.spawn_rate = rate
        if SPAWN_TASK in self.scheduler.tasks:
            self.scheduler.reschedule(SPAWN_TASK, self._spawn_interval())
        self._log_spawn_rate()

    @_between_ticks
    def reset(self):
        log.info("Resetting simulation...")
        # halt both schedules before the fleet goes away
        self.scheduler.cancel_all()
        self._clear_state()
        self.start()
        log.info("Simulation reset complete.")

    # --- read side ---

    @property
    def selected(self) -> Optional[Aircraft]:
        return self.fleet.get(self.selected_id) if self.selected_id is not None else None

    @property
    def active_count(self) -> int:
        return sum(1 for ac in self.fleet.values() if not ac.terminal)

    def snapshot(self) -> SimulationSnapshot:
        return SimulationSnapshot(
            aircraft=tuple(ac.snapshot() for ac in self.fleet.values()),
            active_count=self.active_count,
            landed_count=self.landed_count,
            collision_count=self.collision_count,
            speed=self.speed,
            spawn_rate=self.spawn_rate,
            selected_id=self.selected_id,
            game_over=self.game_over,
        )
