import unittest

from shikaku.core.models import Rect
from shikaku.engine.coloring import assign_colors, build_adjacency, shares_edge
from shikaku.engine.generator import generate

PALETTE = ["red", "yellow", "blue"]


class AdjacencyTests(unittest.TestCase):
    def test_shared_edge(self) -> None:
        self.assertTrue(shares_edge(Rect(0, 0, 2, 2), Rect(0, 2, 1, 2)))
        self.assertTrue(shares_edge(Rect(0, 0, 2, 1), Rect(1, 1, 2, 1)))

    def test_corner_contact_is_not_adjacent(self) -> None:
        self.assertFalse(shares_edge(Rect(0, 0, 1, 1), Rect(1, 1, 1, 1)))

    def test_distant_rectangles(self) -> None:
        self.assertFalse(shares_edge(Rect(0, 0, 1, 1), Rect(0, 2, 1, 1)))

    def test_graph_is_symmetric(self) -> None:
        rects = [Rect(0, 0, 1, 1), Rect(0, 1, 1, 1), Rect(1, 0, 2, 1)]
        self.assertEqual(build_adjacency(rects), {0: {1, 2}, 1: {0, 2}, 2: {0, 1}})


class ColorAssignmentTests(unittest.TestCase):
    def test_balances_usage(self) -> None:
        colors = assign_colors([Rect(0, 0, 1, 1), Rect(0, 2, 1, 1)], PALETTE)
        self.assertEqual(colors, {0: "red", 1: "yellow"})

    def test_fallback_when_every_colour_taken(self) -> None:
        rects = [Rect(0, 0, 1, 1), Rect(0, 1, 1, 1), Rect(0, 2, 1, 1), Rect(1, 0, 3, 1)]
        with self.assertLogs("shikaku.engine.coloring", level="WARNING"):
            colors = assign_colors(rects, PALETTE)
        self.assertEqual(colors, {0: "red", 1: "yellow", 2: "blue", 3: "red"})

    def test_empty_palette(self) -> None:
        with self.assertRaises(ValueError):
            assign_colors([Rect(0, 0, 1, 1)], [])

    def test_generated_layout_conflicts_only_on_fallback(self) -> None:
        rects = list(generate("medium", "colors", 8, 8).solution)
        adjacency = build_adjacency(rects)
        colors = assign_colors(rects, PALETTE)
        for index, neighbours in adjacency.items():
            earlier = {colors[n] for n in neighbours if n < index}
            if colors[index] in earlier:
                self.assertEqual(earlier, set(PALETTE))
