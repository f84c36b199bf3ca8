import logging
import queue
import threading
from typing import Optional

import pyttsx3

log = logging.getLogger(__name__)

_enabled = False
_queue: "queue.Queue[Optional[str]]" = queue.Queue()
_worker: Optional[threading.Thread] = None
_worker_lock = threading.Lock()


def _create_engine():
    engine = pyttsx3.init()
    engine.setProperty("rate", 175)
    engine.setProperty("volume", 0.9)
    return engine


def _run_callouts():
    """Single speaker thread. It owns the engine and says one callout at a time."""
    engine = None
    while True:
        text = _queue.get()
        try:
            if text is None:
                return
            # callouts queued before voice was switched off are dropped
            if not _enabled:
                continue
            if engine is None:
                engine = _create_engine()
            engine.say(text)
            engine.runAndWait()
        except Exception as e:
            # no audio device is not worth taking the sim down for
            log.warning("Voice callout failed: %s", e)
            engine = None
        finally:
            _queue.task_done()


def _ensure_worker():
    global _worker
    with _worker_lock:
        if _worker is None or not _worker.is_alive():
            _worker = threading.Thread(target=_run_callouts, name="voice-callouts", daemon=True)
            _worker.start()


def set_voice_enabled(enabled: bool):
    global _enabled
    _enabled = enabled
    if enabled:
        _ensure_worker()


def voice_enabled() -> bool:
    return _enabled


def speak(text: str):
    """Queue text for the speaker thread."""
    if not _enabled or not text:
        return
    _ensure_worker()
    _queue.put(str(text))


def shutdown(timeout: float = 2.0):
    global _worker
    with _worker_lock:
        worker, _worker = _worker, None
    if worker is not None and worker.is_alive():
        _queue.put(None)
        worker.join(timeout)


def callout_text(message: str) -> str:
    """Turn a log line into something worth saying, or '' to stay quiet."""
    if message.startswith("CRITICAL: Collision between"):
        return message.replace("CRITICAL: ", "").rstrip("!")
    if message.endswith("landed successfully at runway."):
        return message.replace("Aircraft ", "").replace(" successfully at runway.", "")
    return ""


class VoiceCallouts(logging.Handler):
    """Speaks collision and landing events."""

    def emit(self, record: logging.LogRecord):
        try:
            text = callout_text(record.getMessage())
        except Exception:
            self.handleError(record)
            return
        if text:
            speak(text)
