import unittest

import numpy as np

from lib_figure import transform
from lib_figure.data import SEGMENT_NAMES, BodyShape
from lib_figure.geometry import (
    box_lines,
    figure_primitives,
    floor_lines,
    orbit_eye,
    sphere_lines,
    transform_points,
    world_lines,
)
from lib_figure.skeleton import Skeleton


class TestPrimitives(unittest.TestCase):
    def test_box_has_twelve_edges(self) -> None:
        lines = box_lines(2.0, 4.0, 6.0)
        self.assertEqual(lines.shape, (24, 3))
        np.testing.assert_allclose(np.abs(lines).max(axis=0), [1.0, 2.0, 3.0])
        lengths = np.linalg.norm(lines[0::2] - lines[1::2], axis=1)
        self.assertEqual(sorted(set(np.round(lengths, 9))), [2.0, 4.0, 6.0])

    def test_sphere_points_lie_on_surface(self) -> None:
        lines = sphere_lines(0.3, segments=12)
        self.assertEqual(lines.shape[0] % 2, 0)
        np.testing.assert_allclose(np.linalg.norm(lines, axis=1), 0.3, atol=1e-12)
        self.assertAlmostEqual(float(lines[:, 1].min()), -0.3, places=12)

    def test_sphere_needs_three_segments(self) -> None:
        with self.assertRaises(ValueError):
            sphere_lines(1.0, segments=2)

    def test_floor_is_flat(self) -> None:
        lines = floor_lines(15.0, 8)
        self.assertEqual(lines.shape, (36, 3))
        np.testing.assert_array_equal(lines[:, 1], 0.0)
        self.assertEqual(float(np.abs(lines).max()), 7.5)

    def test_every_segment_has_a_primitive(self) -> None:
        primitives = figure_primitives(BodyShape(), sphere_segments=8)
        self.assertEqual(set(primitives), set(SEGMENT_NAMES))


class TestWorldLines(unittest.TestCase):
    def test_transform_points_applies_translation_and_rotation(self) -> None:
        m = transform.rotate(transform.translation(1.0, 2.0, 3.0), np.pi / 2, "z")
        points = np.array([[1.0, 0.0, 0.0], [0.0, 0.0, 0.0]])
        np.testing.assert_allclose(
            transform_points(m, points), [[1.0, 3.0, 3.0], [1.0, 2.0, 3.0]], atol=1e-12
        )

    def test_feet_rest_on_the_floor(self) -> None:
        skeleton = Skeleton()
        lines = world_lines(skeleton, figure_primitives(skeleton.shape, sphere_segments=20))
        for name in ("left_calf", "right_calf"):
            self.assertAlmostEqual(float(lines[name][:, 1].min()), 0.0, places=9)
        lowest = min(float(points[:, 1].min()) for points in lines.values())
        self.assertAlmostEqual(lowest, 0.0, places=9)

    def test_lines_follow_skeleton_updates(self) -> None:
        skeleton = Skeleton()
        primitives = figure_primitives(skeleton.shape, sphere_segments=8)
        before = world_lines(skeleton, primitives)["torso"]
        skeleton.move_torso(-1.0, False)
        after = world_lines(skeleton, primitives)["torso"]
        np.testing.assert_allclose(after - before, np.tile([0.0, 0.0, -1.0], (len(before), 1)), atol=1e-12)


class TestOrbitEye(unittest.TestCase):
    def test_default_view_matches_corner_camera(self) -> None:
        elev = np.degrees(np.arcsin(5.0 / 15.0))
        eye = orbit_eye(np.zeros(3), 15.0, 45.0, elev)
        np.testing.assert_allclose(eye, [10.0, 5.0, 10.0], atol=1e-9)

    def test_eye_keeps_distance_from_target(self) -> None:
        target = np.array([1.0, 2.0, -3.0])
        for azim, elev in ((0.0, 0.0), (130.0, 40.0), (-75.0, -10.0)):
            eye = orbit_eye(target, 7.5, azim, elev)
            self.assertAlmostEqual(float(np.linalg.norm(eye - target)), 7.5, places=12)

    def test_rejects_non_positive_distance(self) -> None:
        with self.assertRaises(ValueError):
            orbit_eye(np.zeros(3), 0.0, 0.0, 0.0)


if __name__ == "__main__":
    unittest.main()
