import unittest

from numericalbond_core import (
    MAX_LINKS_PER_BLOCK,
    Block,
    Direction,
    InvalidArgumentError,
    InvalidOperationError,
)


class TestBlock(unittest.TestCase):
    def test_given_new_block_when_querying_then_zero_links_and_defaults(self):
        b = Block()
        self.assertEqual(b.max_links, MAX_LINKS_PER_BLOCK)
        self.assertEqual(b.max_links, 99)
        self.assertEqual(b.links_to_have, 0)
        self.assertEqual(b.current_links(), 0)
        for d in Direction.all_directions():
            self.assertEqual(b.links_in_direction(d), 0)
        self.assertTrue(b.is_satisfied())

    def test_given_links_when_linking_then_counts_and_total_track(self):
        b = Block(max_links=3, links_to_have=3)
        b.link(Direction.UP)
        b.link(Direction.UP)
        b.link(Direction.LEFT)
        self.assertEqual(b.links_in_direction(Direction.UP), 2)
        self.assertEqual(b.links_in_direction(Direction.LEFT), 1)
        self.assertEqual(b.links_in_direction(Direction.DOWN), 0)
        self.assertEqual(b.current_links(), 3)
        self.assertTrue(b.is_satisfied())

    def test_given_cap_when_linking_past_it_then_error_and_count_kept(self):
        b = Block(max_links=2)
        b.link(Direction.RIGHT)
        b.link(Direction.RIGHT)
        self.assertFalse(b.can_link(Direction.RIGHT))
        self.assertTrue(b.can_link(Direction.DOWN))
        with self.assertRaises(InvalidOperationError):
            b.link(Direction.RIGHT)
        self.assertEqual(b.links_in_direction(Direction.RIGHT), 2)
        self.assertEqual(b.current_links(), 2)

    def test_given_zero_cap_when_linking_then_rejected(self):
        b = Block(max_links=0)
        with self.assertRaises(InvalidOperationError):
            b.link(Direction.UP)
        self.assertEqual(b.current_links(), 0)

    def test_given_saved_counts_when_restoring_then_total_matches(self):
        b = Block(max_links=4, links_to_have=5, links={Direction.UP: 2, Direction.DOWN: 3})
        self.assertEqual(b.current_links(), 5)
        self.assertEqual(b.links()[Direction.DOWN], 3)
        self.assertTrue(b.is_satisfied())

    def test_given_bad_arguments_when_constructing_then_invalid_argument(self):
        with self.assertRaises(InvalidArgumentError):
            Block(max_links=-1)
        with self.assertRaises(InvalidArgumentError):
            Block(links_to_have=-2)
        with self.assertRaises(InvalidArgumentError):
            Block(max_links=1, links={Direction.UP: 2})
        with self.assertRaises(InvalidArgumentError):
            Block(links={"up": 1})  # type: ignore[dict-item]
        # InvalidArgumentError is still a ValueError
        with self.assertRaises(ValueError):
            Block(max_links=-1)

    def test_given_block_when_copying_then_equal_but_independent(self):
        b = Block(max_links=5, links_to_have=2)
        b.link(Direction.LEFT)
        c = b.copy()
        self.assertEqual(b, c)
        c.link(Direction.LEFT)
        self.assertNotEqual(b, c)
        self.assertEqual(b.links_in_direction(Direction.LEFT), 1)
        with self.assertRaises(TypeError):
            hash(b)

    def test_given_links_view_when_mutating_then_block_unchanged(self):
        b = Block()
        view = b.links()
        view[Direction.UP] = 10
        self.assertEqual(b.links_in_direction(Direction.UP), 0)


if __name__ == '__main__':
    unittest.main(verbosity=2)
