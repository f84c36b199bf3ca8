import logging
from typing import Optional

from atc.objects.aircraft import Aircraft
from atc.objects.airspace import Airspace
from atc.objects.route import Waypoint
from atc.utils import heading_towards
from constants import ROUTE_MODE_REPLACE, ROUTE_MODE_APPEND

log = logging.getLogger(__name__)


def assign_waypoint(aircraft: Optional[Aircraft], point: Waypoint, airspace: Airspace,
                    route_mode: str = ROUTE_MODE_REPLACE) -> bool:
    """
    Route an aircraft to `point`.

    Returns False without touching anything when there is no aircraft or it has
    already landed or collided. The point is clamped into the airspace first.
    """
    if aircraft is None or aircraft.terminal:
        return False

    target = airspace.clamp(*point)

    if route_mode == ROUTE_MODE_APPEND:
        aircraft.route.extend(target)
    elif route_mode == ROUTE_MODE_REPLACE:
        aircraft.route.replace(target)
    else:
        raise ValueError(f"unknown route mode {route_mode!r}")

    aircraft.free_flight = False

    current = aircraft.route.current
    hdg = heading_towards(aircraft.x, aircraft.y, *current)
    if hdg is not None:
        aircraft.hdg = hdg

    tx, ty = target
    if airspace.runway.is_near(tx, ty):
        log.info("%s directed toward runway at (%.1f, %.1f).", aircraft.callsign, tx, ty)
    else:
        log.info("%s directed to (%.1f, %.1f).", aircraft.callsign, tx, ty)
    return True
