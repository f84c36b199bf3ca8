import logging, math
from typing import Optional

from atc.objects.aircraft import Aircraft
from atc.objects.airspace import Airspace
from atc.objects.route import Waypoint
from atc.utils import heading_towards
from constants import ARRIVAL_EPSILON, FLIGHT_MODE_FREE

log = logging.getLogger(__name__)


def move_aircraft(ac: Aircraft, dt: float, speed: float, airspace: Airspace,
                  flight_mode: str = FLIGHT_MODE_FREE) -> Optional[Waypoint]:
    """
    Advance one aircraft by `speed * dt` tiles.

    Returns the waypoint reached during this step, if any. Landed and collided
    aircraft do not move.
    """
    if not ac.movable:
        return None

    step = speed * dt
    target = ac.route.current

    if target is not None:
        return _follow_route(ac, target, step, flight_mode)

    if ac.free_flight:
        _free_flight(ac, step, airspace)
    return None


def _follow_route(ac: Aircraft, target: Waypoint, step: float, flight_mode: str) -> Waypoint:
    tx, ty = target
    dx, dy = tx - ac.x, ty - ac.y
    dist = math.sqrt(dx * dx + dy * dy)

    if dist < step or dist < ARRIVAL_EPSILON:
        # snap onto the waypoint so we never overshoot or orbit it
        ac.x, ac.y = tx, ty
        reached = ac.route.advance()

        nxt = ac.route.current
        if nxt is None:
            if flight_mode == FLIGHT_MODE_FREE:
                ac.enter_free_flight()
                log.info("%s reached final waypoint. Continuing on linear path.", ac.callsign)
            else:
                log.info("%s reached final waypoint. Holding position.", ac.callsign)
        else:
            hdg = heading_towards(ac.x, ac.y, *nxt)
            if hdg is not None:
                ac.hdg = hdg
        return reached

    ac.x += dx / dist * step
    ac.y += dy / dist * step
    ac.hdg = math.atan2(dy, dx)
    return None


def _free_flight(ac: Aircraft, step: float, airspace: Airspace):
    vx, vy = ac.free_vec
    ac.x += vx * step
    ac.y += vy * step

    bounced = False
    if ac.x < 0:
        ac.x, vx, bounced = 0.0, -vx, True
    elif ac.x >= airspace.size:
        ac.x, vx, bounced = airspace.max_coord, -vx, True

    if ac.y < 0:
        ac.y, vy, bounced = 0.0, -vy, True
    elif ac.y >= airspace.size:
        ac.y, vy, bounced = airspace.max_coord, -vy, True

    if bounced:
        ac.free_vec = (vx, vy)
        ac.hdg = math.atan2(vy, vx)
