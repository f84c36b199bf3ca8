import collections, datetime, logging
from typing import Deque, List, NamedTuple

from constants import MESSAGE_LOG_LIMIT


class LogEntry(NamedTuple):
    timestamp: str
    level: int
    text: str

    def __str__(self):
        return f"[{self.timestamp}] {self.text}"


class MessageLog(logging.Handler):
    """Operator-facing log: newest entry first, capped in length."""

    def __init__(self, limit: int = MESSAGE_LOG_LIMIT, level=logging.INFO):
        super().__init__(level)
        self.entries: Deque[LogEntry] = collections.deque(maxlen=limit)

    def emit(self, record: logging.LogRecord):
        try:
            stamp = datetime.datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
            self.entries.appendleft(LogEntry(stamp, record.levelno, record.getMessage()))
        except Exception:
            self.handleError(record)

    def latest(self, n: int) -> List[LogEntry]:
        return list(self.entries)[:n]

    def clear(self):
        self.entries.clear()
