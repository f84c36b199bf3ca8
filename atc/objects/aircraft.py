import dataclasses, math, random
from typing import Tuple

from atc.utils import heading_to_vec, heading_deg
from constants import (
    CALLSIGN_PREFIX, STATE_FLYING, STATE_WARNING, STATE_LANDED, STATE_COLLIDED,
    FLIGHT_MODE_FREE,
)
from .airspace import Airspace
from .route import Route, Waypoint

ACTIVE_STATES = (STATE_FLYING, STATE_WARNING)
TERMINAL_STATES = (STATE_LANDED, STATE_COLLIDED)


def make_callsign(ident: int) -> str:
    return f"{CALLSIGN_PREFIX}{ident:03d}"


@dataclasses.dataclass(frozen=True)
class AircraftSnapshot:
    id: int
    callsign: str
    x: float
    y: float
    heading: float
    state: str
    is_selected: bool
    waypoints: Tuple[Waypoint, ...] = ()

    @property
    def heading_deg(self) -> int:
        return heading_deg(self.heading)


@dataclasses.dataclass
class Aircraft:
    id: int
    callsign: str
    x: float
    y: float
    hdg: float = 0.0
    state: str = STATE_FLYING
    route: Route = dataclasses.field(default_factory=Route)
    free_flight: bool = False
    free_vec: Tuple[float, float] = (0.0, 0.0)
    selected: bool = False
    just_collided: bool = False

    @property
    def movable(self) -> bool:
        return self.state in ACTIVE_STATES

    @property
    def terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    def enter_free_flight(self):
        """Continue in a straight line along the current heading."""
        self.free_flight = True
        self.free_vec = heading_to_vec(self.hdg)

    def snapshot(self) -> AircraftSnapshot:
        return AircraftSnapshot(
            id=self.id,
            callsign=self.callsign,
            x=self.x,
            y=self.y,
            heading=self.hdg,
            state=self.state,
            is_selected=self.selected,
            waypoints=self.route.pending,
        )

    def __repr__(self):
        return (f"Aircraft({self.callsign}, pos=({self.x:.1f}, {self.y:.1f}), "
                f"hdg={heading_deg(self.hdg):03d}, {self.state})")


def spawn_aircraft(ident: int, airspace: Airspace, rng: random.Random,
                   flight_mode: str = FLIGHT_MODE_FREE) -> Aircraft:
    """
    Create an aircraft on a random airspace edge.

    Free-flight aircraft leave with a random heading; waypoint-only aircraft wait
    at the edge until routed.
    """
    _, x, y = airspace.random_edge_position(rng)
    plane = Aircraft(ident, make_callsign(ident), x, y)

    if flight_mode == FLIGHT_MODE_FREE:
        plane.hdg = rng.random() * 2 * math.pi
        plane.enter_free_flight()

    return plane
