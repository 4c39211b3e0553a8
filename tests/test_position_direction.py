import unittest

from numericalbond_core import Direction, InvalidArgumentError, Position


class TestPosition(unittest.TestCase):
    def test_given_equal_coordinates_when_comparing_then_equal_and_same_hash(self):
        self.assertEqual(Position(1, 2), Position(1, 2))
        self.assertNotEqual(Position(1, 2), Position(2, 1))
        self.assertEqual(hash(Position(3, 4)), hash(Position(3, 4)))
        d = {Position(0, 0): "a"}
        self.assertEqual(d[Position(0, 0)], "a")

    def test_given_position_when_assigning_then_frozen(self):
        p = Position(0, 0)
        with self.assertRaises(AttributeError):
            p.x = 5  # type: ignore[misc]

    def test_given_negative_coordinates_when_constructing_then_no_validation(self):
        p = Position(-1, 7)
        self.assertEqual((p.x, p.y), (-1, 7))
        self.assertEqual(str(p), "(-1, 7)")


class TestDirection(unittest.TestCase):
    def test_given_all_directions_when_listing_then_four_in_fixed_order(self):
        self.assertEqual(
            Direction.all_directions(),
            (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT),
        )
        self.assertEqual(Direction.all_directions(), Direction.all_directions())

    def test_given_position_when_translating_then_one_step_without_bounds(self):
        p = Position(0, 0)
        self.assertEqual(Direction.UP.translate(p), Position(0, -1))
        self.assertEqual(Direction.DOWN.translate(p), Position(0, 1))
        self.assertEqual(Direction.LEFT.translate(p), Position(-1, 0))
        self.assertEqual(Direction.RIGHT.translate(p), Position(1, 0))

    def test_given_direction_when_taking_opposite_then_involutive_and_reverses_step(self):
        pairs = {
            Direction.UP: Direction.DOWN,
            Direction.DOWN: Direction.UP,
            Direction.LEFT: Direction.RIGHT,
            Direction.RIGHT: Direction.LEFT,
        }
        p = Position(4, 4)
        for d, expected in pairs.items():
            self.assertIs(d.opposite(), expected)
            self.assertIs(d.opposite().opposite(), d)
            self.assertEqual(d.opposite().translate(d.translate(p)), p)

    def test_given_names_when_looking_up_then_case_insensitive_or_error(self):
        self.assertIs(Direction.from_name("up"), Direction.UP)
        self.assertIs(Direction.from_name("LEFT"), Direction.LEFT)
        with self.assertRaises(InvalidArgumentError):
            Direction.from_name("north")


if __name__ == '__main__':
    unittest.main(verbosity=2)
