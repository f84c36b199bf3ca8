from typing import Optional

from atc.objects.aircraft import Aircraft
from atc.objects.route import Waypoint
from atc.objects.runway import Runway
from atc.utils import distance_sq
from constants import LANDING_MODE_RADIUS, LANDING_MODE_WAYPOINT


def check_landing(ac: Aircraft, runway: Runway, landing_mode: str = LANDING_MODE_RADIUS,
                  reached: Optional[Waypoint] = None) -> bool:
    """
    True when the aircraft satisfies runway arrival.

    `radius` mode tests the position against the landing circle around the runway
    centre. `waypoint` mode requires that the step which produced `reached` ended the
    route on a runway cell.
    """
    if ac.terminal:
        return False

    if landing_mode == LANDING_MODE_RADIUS:
        cx, cy = runway.center
        r = runway.landing_radius
        return runway.in_row_band(ac.y) and distance_sq(ac.x, ac.y, cx, cy) <= r * r

    if landing_mode == LANDING_MODE_WAYPOINT:
        if reached is None or not ac.route.exhausted:
            return False
        return runway.contains_cell(*reached)

    raise ValueError(f"unknown landing mode {landing_mode!r}")
