import math
import unittest

import numpy as np

from lib_figure import transform
from lib_figure.errors import InvalidAxis, SingularMatrixError


class TestElementaryMatrices(unittest.TestCase):
    def test_identity_is_fresh_copy(self) -> None:
        a = transform.identity()
        a[0, 3] = 5.0
        np.testing.assert_array_equal(transform.identity(), np.eye(4))

    def test_rotation_x_maps_y_to_z(self) -> None:
        m = transform.rotation(math.pi / 2, "x")
        np.testing.assert_allclose(m @ [0.0, 1.0, 0.0, 1.0], [0.0, 0.0, 1.0, 1.0], atol=1e-12)

    def test_rotation_y_maps_z_to_x(self) -> None:
        m = transform.rotation(math.pi / 2, "y")
        np.testing.assert_allclose(m @ [0.0, 0.0, 1.0, 1.0], [1.0, 0.0, 0.0, 1.0], atol=1e-12)

    def test_rotation_z_maps_x_to_y(self) -> None:
        m = transform.rotation(math.pi / 2, "z")
        np.testing.assert_allclose(m @ [1.0, 0.0, 0.0, 1.0], [0.0, 1.0, 0.0, 1.0], atol=1e-12)

    def test_unknown_axis_is_rejected(self) -> None:
        with self.assertRaises(InvalidAxis):
            transform.rotation(0.1, "w")
        with self.assertRaises(ValueError):
            transform.rotate(transform.identity(), 0.1, "X")

    def test_affine_last_row_is_kept(self) -> None:
        m = transform.scale(transform.rotate(transform.translation(1, 2, 3), 0.4, "y"), 2, 3, 4)
        np.testing.assert_array_equal(m[3], [0.0, 0.0, 0.0, 1.0])


class TestComposition(unittest.TestCase):
    def test_translate_right_multiplies_in_local_frame(self) -> None:
        turned = transform.rotation(math.pi / 2, "z")
        moved = transform.translate(turned, 1.0, 0.0, 0.0)
        np.testing.assert_allclose(transform.translation_part(moved), [0.0, 1.0, 0.0], atol=1e-12)

    def test_multiply_is_not_commutative(self) -> None:
        t = transform.translation(1.0, 0.0, 0.0)
        r = transform.rotation(math.pi / 2, "y")
        self.assertFalse(np.allclose(transform.multiply(t, r), transform.multiply(r, t)))

    def test_scale_stretches_local_axes(self) -> None:
        m = transform.scale(transform.identity(), 1.0, 2.5, 1.0)
        np.testing.assert_allclose(np.linalg.norm(m[:3, :3], axis=0), [1.0, 2.5, 1.0])

    def test_inputs_are_not_mutated(self) -> None:
        m = transform.translation(1.0, 2.0, 3.0)
        before = m.copy()
        transform.rotate(m, 0.3, "x")
        transform.scale(m, 2.0, 2.0, 2.0)
        transform.invert(m)
        np.testing.assert_array_equal(m, before)


class TestInvert(unittest.TestCase):
    def test_inverse_round_trip(self) -> None:
        m = transform.translation(0.5, -1.0, 2.0)
        m = transform.rotate(m, 0.7, "x")
        m = transform.scale(m, 1.0, 3.0, 1.0)
        np.testing.assert_allclose(transform.multiply(m, transform.invert(m)), np.eye(4), atol=1e-12)

    def test_zero_scale_is_singular(self) -> None:
        degenerate = transform.scale(transform.identity(), 1.0, 0.0, 1.0)
        with self.assertRaises(SingularMatrixError):
            transform.invert(degenerate)

    def test_small_uniform_scale_is_invertible(self) -> None:
        tiny = transform.scale(transform.identity(), 1e-5, 1e-5, 1e-5)
        np.testing.assert_allclose(
            transform.invert(tiny), transform.scaling(1e5, 1e5, 1e5), rtol=1e-12
        )

    def test_zero_uniform_scale_is_singular(self) -> None:
        with self.assertRaises(SingularMatrixError):
            transform.invert(transform.scale(transform.identity(), 0.0, 0.0, 0.0))

    def test_non_finite_matrix_is_singular(self) -> None:
        broken = transform.identity()
        broken[0, 3] = np.nan
        with self.assertRaises(SingularMatrixError):
            transform.invert(broken)

    def test_singular_error_is_arithmetic_error(self) -> None:
        with self.assertRaises(ArithmeticError):
            transform.invert(np.zeros((4, 4)))


class TestRotateVector(unittest.TestCase):
    def test_quarter_turn_around_z(self) -> None:
        np.testing.assert_allclose(
            transform.rotate_vector([1.0, 0.0, 0.0], math.pi / 2, "z"), [0.0, 1.0, 0.0], atol=1e-12
        )

    def test_matches_4x4_rotation(self) -> None:
        v = np.array([0.3, -1.2, 2.0])
        expected = (transform.rotation(1.1, "x") @ np.append(v, 1.0))[:3]
        np.testing.assert_allclose(transform.rotate_vector(v, 1.1, "x"), expected)

    def test_rejects_non_3_vectors(self) -> None:
        with self.assertRaises(ValueError):
            transform.rotate_vector([1.0, 2.0], 0.1, "x")

    def test_rejects_unknown_axis(self) -> None:
        with self.assertRaises(InvalidAxis):
            transform.rotate_vector([1.0, 0.0, 0.0], 0.1, "q")


if __name__ == "__main__":
    unittest.main()
