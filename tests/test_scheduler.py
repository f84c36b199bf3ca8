import unittest

from atc.scheduler import Scheduler


class TestScheduler(unittest.TestCase):
    def setUp(self):
        self.scheduler = Scheduler()
        self.calls = []

    def _record(self, name):
        return lambda: self.calls.append(name)

    def test_fires_in_time_order(self):
        self.scheduler.every("slow", 1.0, self._record("slow"))
        self.scheduler.every("fast", 0.3, self._record("fast"))
        self.scheduler.start()

        fired = self.scheduler.advance(1.0)

        self.assertEqual(fired, 4)
        self.assertEqual(self.calls, ["fast", "fast", "fast", "slow"])
        self.assertAlmostEqual(self.scheduler.now, 1.0)

    def test_time_carries_over_between_advances(self):
        self.scheduler.every("t", 1.0, self._record("t"))
        self.scheduler.start()

        self.assertEqual(self.scheduler.advance(0.6), 0)
        self.assertEqual(self.scheduler.advance(0.6), 1)

    def test_not_running_does_nothing(self):
        self.scheduler.every("t", 0.1, self._record("t"))
        self.assertEqual(self.scheduler.advance(5.0), 0)
        self.assertEqual(self.calls, [])

    def test_suspended_task_never_fires(self):
        self.scheduler.every("off", None, self._record("off"))
        self.scheduler.every("zero", 0, self._record("zero"))
        self.scheduler.start()

        self.scheduler.advance(100.0)
        self.assertEqual(self.calls, [])

    def test_reschedule_restarts_timer(self):
        self.scheduler.every("s", 1.0, self._record("s"))
        self.scheduler.start()

        self.scheduler.advance(0.9)
        self.scheduler.reschedule("s", 0.5)
        self.assertEqual(self.scheduler.advance(0.4), 0)
        self.assertEqual(self.scheduler.advance(0.1), 1)

    def test_stop_from_callback_halts_dispatch(self):
        def halt():
            self.calls.append("halt")
            self.scheduler.stop()

        self.scheduler.every("halt", 1.0, halt)
        self.scheduler.start()

        self.assertEqual(self.scheduler.advance(10.0), 1)
        self.assertEqual(self.calls, ["halt"])
        self.assertFalse(self.scheduler.running)

    def test_reentrant_advance_refused(self):
        self.scheduler.every("bad", 0.5, lambda: self.scheduler.advance(1.0))
        self.scheduler.start()

        with self.assertRaises(RuntimeError):
            self.scheduler.advance(1.0)

        # dispatch flag released after the failure
        self.scheduler.cancel("bad")
        self.assertEqual(self.scheduler.advance(1.0), 0)

    def test_cancel_all_stops_everything(self):
        self.scheduler.every("a", 0.1, self._record("a"))
        self.scheduler.start()
        self.scheduler.cancel_all()

        self.assertFalse(self.scheduler.running)
        self.assertEqual(self.scheduler.tasks, {})


if __name__ == "__main__":
    unittest.main()
