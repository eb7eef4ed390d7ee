"""Tests for locker puzzles."""

import random

import pytest

from maze_escape.core.puzzles import (
    PUZZLE_GENERATORS,
    TYPING_PHRASES,
    Puzzle,
    PuzzleDifficulty,
    PuzzleType,
    generate_binary_puzzle,
    generate_hex_puzzle,
    generate_math_puzzle,
    generate_random_puzzle,
    generate_typing_puzzle,
    get_puzzle_by_difficulty,
    validate_answer,
)


class FixedRandomRng(random.Random):
    """Seeded random source whose random() always returns one value."""

    value = 0.5

    def random(self) -> float:
        return self.value


def fixed_roll(value: float) -> FixedRandomRng:
    rng = FixedRandomRng(0)
    rng.value = value
    return rng


class TestGenerators:
    """Tests for each puzzle kind."""

    def test_math_puzzle_answer_matches_question(self, rng):
        """Test that the stored answer solves the question."""
        for _ in range(30):
            puzzle = generate_math_puzzle(rng)
            left, op, right = puzzle.question.removesuffix(" = ?").split(" ")
            a, b = int(left), int(right)
            expected = {"+": a + b, "-": a - b, "×": a * b}[op]

            assert puzzle.type == PuzzleType.MATH
            assert puzzle.answer == str(expected)
            assert puzzle.time_limit == 15

    def test_subtraction_never_negative(self, rng):
        """Test subtraction operands keep the answer positive."""
        for _ in range(100):
            puzzle = generate_math_puzzle(rng)
            if " - " in puzzle.question:
                assert int(puzzle.answer) > 0

    def test_typing_puzzle(self, rng):
        """Test the phrase is quoted in the question."""
        puzzle = generate_typing_puzzle(rng)

        assert puzzle.type == PuzzleType.TYPING
        assert puzzle.answer in TYPING_PHRASES
        assert puzzle.question == f'Type: "{puzzle.answer}"'
        assert puzzle.time_limit == 20

    def test_binary_puzzle(self, rng):
        """Test both conversion directions agree with int()."""
        for _ in range(20):
            puzzle = generate_binary_puzzle(rng)
            words = puzzle.question.split(" ")
            if puzzle.question.startswith("Convert binary"):
                assert puzzle.answer == str(int(words[2], 2))
            else:
                assert puzzle.question.endswith("to binary:")
                assert puzzle.answer == format(int(words[1]), "b")
            assert puzzle.time_limit == 25

    def test_hex_puzzle(self, rng):
        """Test hexadecimal answers are upper case."""
        puzzle = generate_hex_puzzle(rng)
        number = int(puzzle.question.split(" ")[1])

        assert puzzle.answer == format(number, "X")
        assert puzzle.time_limit == 20

    def test_ids_are_reproducible(self):
        """Test the same seed produces the same puzzle."""
        first = generate_random_puzzle(random.Random(7))
        second = generate_random_puzzle(random.Random(7))
        assert first == second
        assert len(first.id) == 12

    def test_random_puzzle_uses_every_generator(self, rng):
        """Test that all kinds are reachable."""
        questions = [generate_random_puzzle(rng).question for _ in range(200)]

        assert any(" = ?" in q for q in questions)
        assert any(q.startswith("Type:") for q in questions)
        assert any("binary" in q for q in questions)
        assert any("hexadecimal" in q for q in questions)
        assert len(PUZZLE_GENERATORS) == 4


class TestDifficulty:
    """Tests for difficulty tiers."""

    @pytest.mark.parametrize(
        "difficulty,roll,marker",
        [
            ("easy", 0.9, " = ?"),
            ("easy", 0.1, "Type:"),
            ("medium", 0.9, "binary"),
            ("medium", 0.1, " = ?"),
            ("hard", 0.9, "hexadecimal"),
            ("hard", 0.1, "binary"),
        ],
    )
    def test_tier_selection(self, difficulty, roll, marker):
        """Test which kind each tier picks for a given roll."""
        puzzle = get_puzzle_by_difficulty(difficulty, fixed_roll(roll))
        assert marker in puzzle.question

    def test_accepts_enum(self, rng):
        """Test the enum and its value are interchangeable."""
        puzzle = get_puzzle_by_difficulty(PuzzleDifficulty.HARD, rng)
        assert puzzle.type == PuzzleType.MATH

    def test_unknown_difficulty_raises(self, rng):
        """Test that unknown tiers are rejected."""
        with pytest.raises(ValueError):
            get_puzzle_by_difficulty("impossible", rng)


class TestValidateAnswer:
    """Tests for answer checking."""

    def test_ignores_case_and_whitespace(self):
        """Test answer normalization."""
        puzzle = Puzzle("p1", PuzzleType.TYPING, 'Type: "access granted"', "access granted", 20)

        assert validate_answer(puzzle, "  Access Granted \n")
        assert not validate_answer(puzzle, "access  granted")

    def test_hex_is_case_insensitive(self):
        """Test lower case hex digits are accepted."""
        puzzle = Puzzle("p2", PuzzleType.MATH, "Convert 255 to hexadecimal:", "FF", 20)
        assert validate_answer(puzzle, "ff")

    def test_math_accepts_equal_integer(self):
        """Test leading zeros do not matter for numbers."""
        puzzle = Puzzle("p3", PuzzleType.MATH, "3 + 4 = ?", "7", 15)

        assert validate_answer(puzzle, "007")
        assert not validate_answer(puzzle, "8")
        assert not validate_answer(puzzle, "seven")

    def test_to_dict_hides_answer(self):
        """Test the answer is only serialized on request."""
        puzzle = Puzzle("p4", PuzzleType.MATH, "3 + 4 = ?", "7", 15)

        assert "answer" not in puzzle.to_dict()
        assert puzzle.to_dict(include_answer=True)["answer"] == "7"
        assert puzzle.to_dict()["type"] == "math"
