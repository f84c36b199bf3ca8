import dataclasses, math

from constants import RUNWAY_COL, RUNWAY_START_ROW, RUNWAY_END_ROW, LANDING_RADIUS


@dataclasses.dataclass(frozen=True)
class Runway:
    """Vertical runway occupying one column over an inclusive span of rows."""
    col: int = RUNWAY_COL
    start_row: int = RUNWAY_START_ROW
    end_row: int = RUNWAY_END_ROW
    landing_radius: float = LANDING_RADIUS

    def __post_init__(self):
        if self.end_row < self.start_row:
            raise ValueError(f"runway rows reversed: {self.start_row}..{self.end_row}")

    @property
    def mid_row(self) -> float:
        return (self.start_row + self.end_row) / 2

    @property
    def center(self) -> tuple[float, float]:
        return float(self.col), self.mid_row

    def in_row_band(self, y: float) -> bool:
        """Row lies within the runway span extended by the landing radius."""
        return self.start_row - self.landing_radius <= y <= self.end_row + self.landing_radius

    def is_near(self, x: float, y: float) -> bool:
        return abs(x - self.col) <= self.landing_radius and self.in_row_band(y)

    def contains_cell(self, x: float, y: float) -> bool:
        return math.floor(x) == self.col and self.start_row <= math.floor(y) <= self.end_row

    def cells(self) -> list[tuple[int, int]]:
        return [(self.col, r) for r in range(self.start_row, self.end_row + 1)]
