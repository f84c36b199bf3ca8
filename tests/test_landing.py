import unittest

from atc.landing import check_landing
from atc.objects.aircraft import Aircraft
from atc.objects.route import Route
from atc.objects.runway import Runway
from atc.simulation import Simulation
from constants import LANDING_MODE_RADIUS, LANDING_MODE_WAYPOINT, STATE_COLLIDED, STATE_LANDED


class TestRunway(unittest.TestCase):
    def test_default_geometry(self):
        rw = Runway()
        self.assertEqual(rw.center, (15.0, 15.0))
        self.assertEqual(rw.cells(), [(15, 14), (15, 15), (15, 16)])

    def test_immutable(self):
        with self.assertRaises(Exception):
            Runway().col = 3

    def test_rejects_reversed_rows(self):
        with self.assertRaises(ValueError):
            Runway(start_row=10, end_row=5)

    def test_near(self):
        rw = Runway()
        self.assertTrue(rw.is_near(15.5, 17.0))
        self.assertFalse(rw.is_near(16.5, 15.0))
        self.assertFalse(rw.is_near(15.0, 17.5))


class TestRadiusLanding(unittest.TestCase):
    def setUp(self):
        self.rw = Runway()

    def _at(self, x, y):
        return Aircraft(1, "FL001", x, y)

    def test_inside_landing_circle(self):
        self.assertTrue(check_landing(self._at(15.0, 15.5), self.rw, LANDING_MODE_RADIUS))
        self.assertTrue(check_landing(self._at(14.5, 15.0), self.rw, LANDING_MODE_RADIUS))
        self.assertTrue(check_landing(self._at(14.0, 15.0), self.rw, LANDING_MODE_RADIUS))

    def test_outside_landing_circle(self):
        self.assertFalse(check_landing(self._at(16.1, 15.0), self.rw, LANDING_MODE_RADIUS))
        self.assertFalse(check_landing(self._at(15.0, 16.2), self.rw, LANDING_MODE_RADIUS))
        self.assertFalse(check_landing(self._at(0.0, 0.0), self.rw, LANDING_MODE_RADIUS))

    def test_terminal_aircraft_never_land_again(self):
        for state in (STATE_LANDED, STATE_COLLIDED):
            ac = Aircraft(1, "FL001", 15.0, 15.0, state=state)
            self.assertFalse(check_landing(ac, self.rw, LANDING_MODE_RADIUS))


class TestWaypointLanding(unittest.TestCase):
    def setUp(self):
        self.rw = Runway()

    def test_final_waypoint_on_runway(self):
        ac = Aircraft(1, "FL001", 15.5, 14.5, route=Route([(15.5, 14.5)], cursor=1))
        self.assertTrue(check_landing(ac, self.rw, LANDING_MODE_WAYPOINT, reached=(15.5, 14.5)))

    def test_needs_a_waypoint_reached_this_step(self):
        ac = Aircraft(1, "FL001", 15.5, 14.5, route=Route([(15.5, 14.5)], cursor=1))
        self.assertFalse(check_landing(ac, self.rw, LANDING_MODE_WAYPOINT, reached=None))

    def test_intermediate_waypoint_does_not_land(self):
        ac = Aircraft(1, "FL001", 15.5, 15.5, route=Route([(15.5, 15.5), (3.0, 3.0)], cursor=1))
        self.assertFalse(check_landing(ac, self.rw, LANDING_MODE_WAYPOINT, reached=(15.5, 15.5)))

    def test_final_waypoint_off_runway(self):
        ac = Aircraft(1, "FL001", 14.5, 15.0, route=Route([(14.5, 15.0)], cursor=1))
        self.assertFalse(check_landing(ac, self.rw, LANDING_MODE_WAYPOINT, reached=(14.5, 15.0)))

    def test_unknown_mode(self):
        with self.assertRaises(ValueError):
            check_landing(Aircraft(1, "FL001", 0.0, 0.0), self.rw, "splashdown")


class TestFinalizeLanding(unittest.TestCase):
    def test_lands_exactly_once(self):
        sim = Simulation(autostart=False)
        ac = sim.add_aircraft(15.0, 15.0)
        sim.select_aircraft(ac.id)

        self.assertTrue(sim.land(ac))
        for _ in range(5):
            self.assertFalse(sim.land(ac))

        self.assertEqual(sim.landed_count, 1)
        self.assertEqual(ac.state, STATE_LANDED)
        self.assertNotIn(ac.id, sim.fleet)
        self.assertIsNone(sim.selected_id)
        self.assertFalse(ac.selected)


if __name__ == "__main__":
    unittest.main()
