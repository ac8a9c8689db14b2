import unittest

import numpy as np

from lib_figure import transform
from lib_figure.commands import COMMANDS, CommandDispatcher, supported_commands
from lib_figure.data import SEGMENT_NAMES
from lib_figure.errors import UnknownSegment, UnsupportedCommand
from lib_figure.skeleton import Skeleton


class TestSelection(unittest.TestCase):
    def setUp(self) -> None:
        self.dispatcher = CommandDispatcher(Skeleton())

    def test_starts_on_torso(self) -> None:
        self.assertEqual(self.dispatcher.selected, "torso")
        self.assertEqual(self.dispatcher.selected_label, "Torso")

    def test_previous_wraps_to_last(self) -> None:
        self.assertEqual(self.dispatcher.select_previous(), "right_calf")

    def test_next_wraps_to_first(self) -> None:
        for _ in range(len(SEGMENT_NAMES) - 1):
            self.dispatcher.select_next()
        self.assertEqual(self.dispatcher.selected, "right_calf")
        self.assertEqual(self.dispatcher.select_next(), "torso")

    def test_select_by_name(self) -> None:
        self.dispatcher.select("left_forearm")
        self.assertEqual(self.dispatcher.selected_label, "Left forearm")
        with self.assertRaises(UnknownSegment):
            self.dispatcher.select("tail")


class TestBindings(unittest.TestCase):
    def setUp(self) -> None:
        self.skeleton = Skeleton()
        self.dispatcher = CommandDispatcher(self.skeleton, step=0.1)

    def _rotation(self, name: str) -> np.ndarray:
        return self.skeleton.segment(name).rotation

    def test_supported_commands(self) -> None:
        self.assertEqual(supported_commands("torso"), COMMANDS)
        self.assertEqual(supported_commands("left_arm"), COMMANDS)
        self.assertEqual(supported_commands("head"), ("left", "right"))
        for name in ("left_forearm", "right_thigh", "left_calf"):
            self.assertEqual(supported_commands(name), ("up", "down"))
        with self.assertRaises(UnknownSegment):
            supported_commands("tail")

    def test_torso_up_walks_forward(self) -> None:
        self.dispatcher.dispatch("up")
        self.dispatcher.dispatch("up")
        self.assertTrue(self.skeleton.walk_state.walking)
        self.assertEqual(self.skeleton.walk_state.frame, 1)
        self.assertGreater(self.skeleton.torso.world[2, 3], 0.19)

    def test_torso_down_walks_back_and_stops(self) -> None:
        self.dispatcher.dispatch("up")
        self.dispatcher.dispatch("down")
        self.assertFalse(self.skeleton.walk_state.walking)
        self.assertAlmostEqual(float(self.skeleton.torso.world[2, 3]), 0.0, places=12)

    def test_torso_left_turns(self) -> None:
        self.dispatcher.dispatch("left")
        np.testing.assert_allclose(self.skeleton.torso.pose, transform.rotation(0.1, "y"))

    def test_arm_bindings(self) -> None:
        self.dispatcher.select("left_arm")
        self.dispatcher.dispatch("up")
        np.testing.assert_allclose(self._rotation("left_arm"), transform.rotation(0.1, "z"))

        self.dispatcher.select("right_arm")
        self.dispatcher.dispatch("up")
        np.testing.assert_allclose(self._rotation("right_arm"), transform.rotation(-0.1, "z"))
        self.dispatcher.dispatch("up")
        self.dispatcher.dispatch("down")
        np.testing.assert_allclose(self._rotation("right_arm"), transform.rotation(-0.1, "z"), atol=1e-12)

    def test_arm_left_right_rotate_around_y(self) -> None:
        self.dispatcher.select("left_arm")
        self.dispatcher.dispatch("right")
        np.testing.assert_allclose(self._rotation("left_arm"), transform.rotation(0.1, "y"))

    def test_hinges_bend_backwards_on_up(self) -> None:
        for name in ("left_thigh", "right_calf"):
            self.dispatcher.select(name)
            self.dispatcher.dispatch("up")
            np.testing.assert_allclose(self._rotation(name), transform.rotation(-0.1, "x"))

    def test_forearm_down_bends_forward(self) -> None:
        forearm = self.skeleton.segment("left_forearm")
        stretched = forearm.pose.copy()
        self.dispatcher.select("left_forearm")
        self.dispatcher.dispatch("down")
        np.testing.assert_allclose(forearm.pose, transform.rotation(0.1, "x") @ stretched)

    def test_head_turns(self) -> None:
        self.dispatcher.select("head")
        self.dispatcher.dispatch("right")
        np.testing.assert_allclose(self.skeleton.head.pose, transform.rotation(-0.1, "y"))

    def test_step_scales_commands(self) -> None:
        dispatcher = CommandDispatcher(self.skeleton, step=0.25)
        dispatcher.select("left_thigh")
        dispatcher.dispatch("down")
        np.testing.assert_allclose(self._rotation("left_thigh"), transform.rotation(0.25, "x"))

    def test_unbound_pairs_are_signalled(self) -> None:
        self.dispatcher.select("left_thigh")
        with self.assertRaises(UnsupportedCommand):
            self.dispatcher.dispatch("left")
        self.dispatcher.select("head")
        with self.assertRaises(UnsupportedCommand):
            self.dispatcher.dispatch("up")

    def test_unknown_command_is_signalled(self) -> None:
        with self.assertRaises(UnsupportedCommand) as ctx:
            self.dispatcher.dispatch("jump")
        self.assertEqual(ctx.exception.segment, "torso")
        self.assertEqual(ctx.exception.command, "jump")

    def test_rejected_command_leaves_state_alone(self) -> None:
        self.dispatcher.dispatch("up")
        self.dispatcher.dispatch("up")
        self.dispatcher.select("head")
        with self.assertRaises(UnsupportedCommand):
            self.dispatcher.dispatch("down")
        self.assertTrue(self.skeleton.walk_state.walking)


if __name__ == "__main__":
    unittest.main()
