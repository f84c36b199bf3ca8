import unittest

from atc.conflicts import detect_conflicts, distance_sq_matrix
from atc.objects.aircraft import Aircraft
from constants import STATE_COLLIDED, STATE_FLYING, STATE_LANDED, STATE_WARNING


def plane(ident, x, y, state=STATE_FLYING):
    return Aircraft(ident, f"FL{ident:03d}", x, y, state=state)


class TestDistanceMatrix(unittest.TestCase):
    def test_squared_distances(self):
        d2 = distance_sq_matrix([plane(1, 0.0, 0.0), plane(2, 3.0, 4.0)])
        self.assertEqual(d2.shape, (2, 2))
        self.assertAlmostEqual(d2[0, 1], 25.0)
        self.assertAlmostEqual(d2[1, 0], 25.0)
        self.assertEqual(d2[0, 0], 0.0)


class TestProximity(unittest.TestCase):
    def test_warning_pair(self):
        a, b = plane(1, 10.0, 10.0), plane(2, 10.0, 13.0)
        report = detect_conflicts([a, b])

        self.assertEqual((a.state, b.state), (STATE_WARNING, STATE_WARNING))
        self.assertEqual(report.collision_count, 0)
        self.assertEqual(report.warnings, [(a, b)])

    def test_collision_pair(self):
        a, b = plane(1, 10.0, 10.0), plane(2, 10.0, 10.5)
        report = detect_conflicts([a, b])

        self.assertEqual((a.state, b.state), (STATE_COLLIDED, STATE_COLLIDED))
        self.assertEqual(report.collision_count, 1)

    def test_boundary_distances(self):
        # exactly 1 tile apart is a warning, exactly 4 is clear
        a, b = plane(1, 10.0, 10.0), plane(2, 11.0, 10.0)
        detect_conflicts([a, b])
        self.assertEqual(a.state, STATE_WARNING)

        c, d = plane(3, 10.0, 10.0), plane(4, 10.0, 14.0)
        detect_conflicts([c, d])
        self.assertEqual((c.state, d.state), (STATE_FLYING, STATE_FLYING))

    def test_warning_clears_after_separation(self):
        a, b = plane(1, 10.0, 10.0), plane(2, 10.0, 12.0)
        detect_conflicts([a, b])
        self.assertEqual(a.state, STATE_WARNING)

        b.y = 20.0
        detect_conflicts([a, b])
        self.assertEqual((a.state, b.state), (STATE_FLYING, STATE_FLYING))

    def test_collided_never_recover_or_pair_again(self):
        a, b = plane(1, 10.0, 10.0), plane(2, 10.0, 10.5)
        detect_conflicts([a, b])

        c = plane(3, 10.0, 12.0)
        for _ in range(3):
            report = detect_conflicts([a, b, c])
            self.assertEqual(report.collision_count, 0)

        self.assertEqual((a.state, b.state), (STATE_COLLIDED, STATE_COLLIDED))
        self.assertEqual(c.state, STATE_FLYING)
        self.assertTrue(a.just_collided)

    def test_cluster_counted_once_per_scan(self):
        planes = [plane(1, 10.0, 10.0), plane(2, 10.0, 10.2), plane(3, 10.0, 10.4)]
        report = detect_conflicts(planes)

        self.assertEqual(report.collision_count, 1)
        self.assertEqual(planes[0].state, STATE_COLLIDED)
        self.assertEqual(planes[1].state, STATE_COLLIDED)

        self.assertEqual(detect_conflicts(planes).collision_count, 0)

    def test_latch_cleared_for_survivors(self):
        a = plane(1, 5.0, 5.0)
        a.just_collided = True
        detect_conflicts([a])
        self.assertFalse(a.just_collided)

    def test_landed_aircraft_ignored(self):
        a, b = plane(1, 10.0, 10.0), plane(2, 10.0, 10.1, state=STATE_LANDED)
        report = detect_conflicts([a, b])
        self.assertEqual(report.collision_count, 0)
        self.assertEqual(a.state, STATE_FLYING)

    def test_independent_pairs_each_counted(self):
        planes = [plane(1, 2.0, 2.0), plane(2, 2.0, 2.5), plane(3, 20.0, 20.0), plane(4, 20.5, 20.0)]
        self.assertEqual(detect_conflicts(planes).collision_count, 2)

    def test_empty_and_single(self):
        self.assertEqual(detect_conflicts([]).collision_count, 0)
        lone = plane(1, 1.0, 1.0, state=STATE_WARNING)
        detect_conflicts([lone])
        self.assertEqual(lone.state, STATE_FLYING)


if __name__ == "__main__":
    unittest.main()
