import dataclasses, random
from typing import Tuple

from atc.utils import clamp
from constants import GRID_SIZE, BOUNDARY_INSET
from .runway import Runway

EDGES = ("W", "N", "S", "E")


@dataclasses.dataclass(frozen=True)
class Airspace:
    size: int = GRID_SIZE
    runway: Runway = dataclasses.field(default_factory=Runway)
    inset: float = BOUNDARY_INSET

    @property
    def max_coord(self) -> float:
        return self.size - self.inset

    def clamp(self, x: float, y: float) -> Tuple[float, float]:
        return clamp(x, 0, self.max_coord), clamp(y, 0, self.max_coord)

    def random_edge_position(self, rng: random.Random) -> Tuple[str, float, float]:
        """Pick an edge and a grid-snapped cell along it."""
        edge = rng.choice(EDGES)
        along = float(rng.randrange(self.size))
        far = float(self.size - 1)

        if edge == "W":
            return edge, 0.0, along
        if edge == "N":
            return edge, along, 0.0
        if edge == "S":
            return edge, along, far
        return edge, far, along
