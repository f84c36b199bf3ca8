import dataclasses, logging
from typing import Callable, Dict, Optional

log = logging.getLogger(__name__)


@dataclasses.dataclass
class RepeatingTask:
    name: str
    interval: Optional[float]
    callback: Callable[[], None]
    elapsed: float = 0.0

    @property
    def suspended(self) -> bool:
        return self.interval is None or self.interval <= 0

    @property
    def remaining(self) -> float:
        return self.interval - self.elapsed


class Scheduler:
    """
    Cooperative scheduler for repeating callbacks on simulated time.

    Every due callback runs to completion before the next one starts, so a task
    can never overlap itself or any other task.
    """

    def __init__(self):
        self.tasks: Dict[str, RepeatingTask] = {}
        self.running = False
        self.now = 0.0
        self._dispatching = False

    def every(self, name: str, interval: Optional[float], callback: Callable[[], None]) -> RepeatingTask:
        task = RepeatingTask(name, interval, callback)
        self.tasks[name] = task
        return task

    def reschedule(self, name: str, interval: Optional[float]):
        """Change a task's interval; its timer restarts from zero."""
        task = self.tasks[name]
        task.interval = interval
        task.elapsed = 0.0

    def cancel(self, name: str):
        self.tasks.pop(name, None)

    def cancel_all(self):
        self.running = False
        self.tasks.clear()

    def start(self):
        self.running = True

    def stop(self):
        self.running = False

    def advance(self, elapsed: float) -> int:
        """Move simulated time forward, firing due callbacks in time order."""
        if self._dispatching:
            raise RuntimeError("Scheduler.advance() called from inside a scheduled callback")
        if not self.running or elapsed <= 0:
            return 0

        fired = 0
        left = elapsed
        self._dispatching = True
        try:
            while self.running:
                due = self._next_due(left)
                if due is None:
                    break

                step = max(0.0, due.remaining)
                for task in self.tasks.values():
                    if not task.suspended:
                        task.elapsed += step
                left -= step
                self.now += step

                due.elapsed = 0.0
                due.callback()
                fired += 1

            if self.running and left > 0:
                for task in self.tasks.values():
                    if not task.suspended:
                        task.elapsed += left
                self.now += left
        finally:
            self._dispatching = False

        return fired

    def _next_due(self, left: float) -> Optional[RepeatingTask]:
        best = None
        for task in list(self.tasks.values()):
            if task.suspended:
                continue
            # tiny slack absorbs float drift from summing fixed intervals
            if task.remaining <= left + 1e-9 and (best is None or task.remaining < best.remaining):
                best = task
        return best
