import math
from typing import Optional, Tuple

Point = Tuple[float, float]


def heading_to_vec(hdg: float) -> Point: return math.cos(hdg), math.sin(hdg)
def heading_deg(hdg: float) -> int: return round(math.degrees(hdg)) % 360
def clamp(v, lo, hi): return max(lo, min(hi, v))


def distance_sq(ax: float, ay: float, bx: float, by: float) -> float:
    dx, dy = ax - bx, ay - by
    return dx * dx + dy * dy


def heading_towards(x: float, y: float, tx: float, ty: float) -> Optional[float]:
    """Heading in radians from (x, y) to (tx, ty), or None if they coincide."""
    dx, dy = tx - x, ty - y
    if dx == 0 and dy == 0:
        return None
    return math.atan2(dy, dx)
