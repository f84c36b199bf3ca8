import dataclasses
from typing import List, Optional, Tuple

Waypoint = Tuple[float, float]


@dataclasses.dataclass
class Route:
    """Ordered waypoints consumed front to back. `cursor` never exceeds len(points)."""
    points: List[Waypoint] = dataclasses.field(default_factory=list)
    cursor: int = 0

    def __len__(self):
        return len(self.points)

    @property
    def current(self) -> Optional[Waypoint]:
        if self.cursor < len(self.points):
            return self.points[self.cursor]
        return None

    @property
    def exhausted(self) -> bool:
        return self.cursor >= len(self.points)

    @property
    def pending(self) -> Tuple[Waypoint, ...]:
        return tuple(self.points[self.cursor:])

    def advance(self) -> Waypoint:
        reached = self.points[self.cursor]
        self.cursor += 1
        return reached

    def replace(self, point: Waypoint):
        self.points = [point]
        self.cursor = 0

    def extend(self, point: Waypoint):
        # keep only the leg underway; reached legs and queued ones are dropped
        self.points = self.points[self.cursor:self.cursor + 1] + [point]
        self.cursor = 0
