from __future__ import annotations
import dataclasses, logging
from typing import List, Sequence, Tuple

import numpy as np

from atc.objects.aircraft import Aircraft
from constants import (
    COLLISION_DISTANCE_SQUARED, SAFE_DISTANCE_SQUARED,
    STATE_FLYING, STATE_WARNING, STATE_COLLIDED,
)

log = logging.getLogger(__name__)

Pair = Tuple[Aircraft, Aircraft]


@dataclasses.dataclass
class ConflictReport:
    collisions: List[Pair] = dataclasses.field(default_factory=list)
    warnings: List[Pair] = dataclasses.field(default_factory=list)

    @property
    def collision_count(self) -> int:
        return len(self.collisions)


def distance_sq_matrix(planes: Sequence[Aircraft]) -> np.ndarray:
    """Pairwise squared distances, shape (n, n)."""
    pos = np.array([(p.x, p.y) for p in planes], dtype=float).reshape(-1, 2)
    diff = pos[:, None, :] - pos[None, :, :]
    return np.einsum("ijk,ijk->ij", diff, diff)


def reset_transient_state(planes: Sequence[Aircraft]):
    for p in planes:
        if p.state == STATE_WARNING:
            p.state = STATE_FLYING
        if p.state != STATE_COLLIDED:
            p.just_collided = False


def detect_conflicts(planes: Sequence[Aircraft]) -> ConflictReport:
    """
    One proximity scan over the fleet, in fleet order.

    Warnings from the previous scan are cleared first so they only persist while the
    threat does. Pairs closer than the collision distance become collided (counted
    once per pair thanks to the per-scan latch); pairs inside the safe distance put
    any flying member into warning.
    """
    report = ConflictReport()
    reset_transient_state(planes)

    if len(planes) < 2:
        return report

    d2 = distance_sq_matrix(planes)
    n = len(planes)

    for i in range(n):
        a = planes[i]
        if a.terminal:
            continue

        for j in range(i + 1, n):
            b = planes[j]
            if b.terminal:
                continue

            dist2 = d2[i, j]
            if dist2 < COLLISION_DISTANCE_SQUARED:
                if not a.just_collided and not b.just_collided:
                    a.state = b.state = STATE_COLLIDED
                    a.just_collided = b.just_collided = True
                    report.collisions.append((a, b))
                    log.critical("CRITICAL: Collision between %s and %s!", a.callsign, b.callsign)

            elif dist2 < SAFE_DISTANCE_SQUARED:
                if a.state == STATE_FLYING:
                    a.state = STATE_WARNING
                if b.state == STATE_FLYING:
                    b.state = STATE_WARNING
                report.warnings.append((a, b))

    return report
