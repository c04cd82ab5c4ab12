import random
import unittest

from wordsearch.core.constants import DEFAULT_LETTERS, Direction
from wordsearch.core.models import Position
from wordsearch.engine.grid import LetterGrid
from wordsearch.engine.placement import PlacementEngine, StartCursor, can_place_word, generate


ANIMALS = [
    "CAT", "DOG", "BIRD", "HORSE", "MOUSE", "SNAKE", "TIGER", "ZEBRA",
    "OTTER", "EAGLE", "SHEEP", "GOAT", "LLAMA", "PANDA", "KOALA", "RAVEN",
]


def spelled(grid: LetterGrid, entry) -> str:
    return "".join(grid.cell(pos.row, pos.col) for pos in entry.positions)


class PlacementPropertyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.results = [
            generate(ANIMALS, DEFAULT_LETTERS, 12, size, rng=random.Random(seed))
            for seed in range(4)
            for size in (8, 12, 16)
        ]

    def test_positions_are_in_bounds(self) -> None:
        for result in self.results:
            size = result.grid.size
            for entry in result.entries:
                for pos in entry.positions:
                    self.assertTrue(1 <= pos.row <= size and 1 <= pos.col <= size)

    def test_entries_spell_their_text_along_one_direction(self) -> None:
        for result in self.results:
            for entry in result.entries:
                self.assertEqual(spelled(result.grid, entry), entry.text)
                direction = entry.direction
                self.assertIsNotNone(direction)
                walked = result.grid.walk(entry.first, direction, entry.length)
                self.assertEqual(list(entry.positions), walked)

    def test_mask_matches_union_of_entry_cells(self) -> None:
        for result in self.results:
            covered = {(pos.row, pos.col) for entry in result.entries for pos in entry.positions}
            for pos in result.grid.iter_positions():
                self.assertEqual(
                    result.grid.is_solution_cell(pos.row, pos.col),
                    (pos.row, pos.col) in covered,
                )
            self.assertIs(result.solution_mask, result.grid.mask)

    def test_every_cell_holds_an_alphabet_letter(self) -> None:
        for result in self.results:
            self.assertEqual(result.grid.unset_count(), 0)
            for row in result.grid.rows:
                for letter in row:
                    self.assertIn(letter, DEFAULT_LETTERS)

    def test_cap_is_respected(self) -> None:
        for max_words in (1, 3, 5):
            result = generate(ANIMALS, DEFAULT_LETTERS, max_words, 12, rng=random.Random(7))
            self.assertLessEqual(len(result.entries), max_words)

    def test_placed_texts_are_unique_input_words(self) -> None:
        for result in self.results:
            texts = [entry.text for entry in result.entries]
            self.assertEqual(len(texts), len(set(texts)))
            self.assertTrue(set(texts) <= set(ANIMALS))


class PlacementScenarioTests(unittest.TestCase):
    def test_three_short_words_on_small_grid(self) -> None:
        for seed in range(5):
            result = generate(["CAT", "DOG", "BIRD"], DEFAULT_LETTERS, 3, 8, rng=random.Random(seed))
            self.assertEqual(sorted(e.text for e in result.entries), ["BIRD", "CAT", "DOG"])
            self.assertEqual(result.grid.unset_count(), 0)
            covered = {(p.row, p.col) for e in result.entries for p in e.positions}
            mask_cells = {
                (p.row, p.col)
                for p in result.grid.iter_positions()
                if result.grid.is_solution_cell(p.row, p.col)
            }
            self.assertEqual(mask_cells, covered)

    def test_letter_range_is_expanded_before_placing(self) -> None:
        for seed in range(5):
            result = generate(["CAT", "DOG", "BIRD"], "A-Z", 3, 8, rng=random.Random(seed))
            self.assertEqual(sorted(e.text for e in result.entries), ["BIRD", "CAT", "DOG"])
            for row in result.grid.rows:
                self.assertNotIn("-", row)
                self.assertTrue(set(row) <= set(DEFAULT_LETTERS))

    def test_word_below_minimum_length_is_never_placed(self) -> None:
        result = generate(["AB"], DEFAULT_LETTERS, 1, 8, rng=random.Random(3))
        self.assertEqual(result.entries, [])
        self.assertEqual(result.grid.unset_count(), 0)
        self.assertFalse(any(flag for row in result.grid.mask for flag in row))

    def test_words_longer_than_grid_are_skipped(self) -> None:
        words = ["AB", "ABCDEFGHIJ", "CAT"]
        result = generate(words, DEFAULT_LETTERS, 5, 8, rng=random.Random(11))
        self.assertEqual([e.text for e in result.entries], ["CAT"])

    def test_characters_outside_alphabet_are_stripped(self) -> None:
        result = generate(["ice-cream", "x'y"], DEFAULT_LETTERS, 5, 10, rng=random.Random(5))
        self.assertEqual([e.text for e in result.entries], ["ICECREAM"])

    def test_restricted_alphabet_fills_noise_from_alphabet(self) -> None:
        result = generate(["ABBA", "BAAB"], "AB", 2, 8, rng=random.Random(2))
        for row in result.grid.rows:
            self.assertTrue(set(row) <= {"A", "B"})

    def test_input_word_list_is_not_reordered(self) -> None:
        words = list(ANIMALS)
        generate(words, DEFAULT_LETTERS, 6, 12, rng=random.Random(1))
        self.assertEqual(words, ANIMALS)

    def test_same_seed_reproduces_the_grid(self) -> None:
        first = generate(ANIMALS, DEFAULT_LETTERS, 10, 12, rng=random.Random(99))
        second = generate(ANIMALS, DEFAULT_LETTERS, 10, 12, rng=random.Random(99))
        self.assertEqual(first.grid.rows, second.grid.rows)
        self.assertEqual(first.entries, second.entries)

    def test_max_words_is_floored_to_one(self) -> None:
        result = generate(["CAT", "DOG"], DEFAULT_LETTERS, 0, 8, rng=random.Random(4))
        self.assertEqual(len(result.entries), 1)


class PlacementHelperTests(unittest.TestCase):
    def test_can_place_allows_matching_crossing(self) -> None:
        grid = LetterGrid(8)
        grid.place_word("CAT", grid.walk(Position(1, 1), Direction.E, 3))
        self.assertTrue(can_place_word(grid, "TOP", Position(1, 3), Direction.S))
        self.assertFalse(can_place_word(grid, "DOG", Position(1, 3), Direction.S))

    def test_can_place_rejects_out_of_bounds(self) -> None:
        grid = LetterGrid(8)
        self.assertFalse(can_place_word(grid, "HORSE", Position(1, 6), Direction.E))
        self.assertFalse(can_place_word(grid, "CAT", Position(2, 1), Direction.NW))
        self.assertTrue(can_place_word(grid, "HORSE", Position(8, 8), Direction.NW))

    def test_rank_directions_prefers_least_used(self) -> None:
        engine = PlacementEngine(random.Random(0))
        usage = {direction: 0 for direction in Direction}
        usage[Direction.E] = 3
        usage[Direction.W] = 1
        ranked = engine.rank_directions(usage)
        self.assertEqual(len(ranked), 8)
        self.assertEqual(ranked[-1], Direction.E)
        self.assertEqual(ranked[-2], Direction.W)
        self.assertEqual(set(ranked), set(Direction))

    def test_start_cursor_visits_every_cell_before_repeating(self) -> None:
        cursor = StartCursor(8, random.Random(0))
        first_pass = [cursor.next() for _ in range(64)]
        self.assertEqual(len(set(first_pass)), 64)
        second_pass = [cursor.next() for _ in range(64)]
        self.assertEqual(set(first_pass), set(second_pass))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
