"""
Locker puzzles.

Each locked locker is opened by answering a short puzzle: arithmetic, typing
a phrase, or converting a number between decimal, binary and hex.
"""

import random
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional


class PuzzleType(Enum):
    """How an answer is compared."""
    MATH = "math"
    TYPING = "typing"


class PuzzleDifficulty(Enum):
    """Puzzle difficulty tiers."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class Puzzle:
    """A single puzzle and its expected answer."""
    id: str
    type: PuzzleType
    question: str
    answer: str
    time_limit: int  # seconds

    def to_dict(self, include_answer: bool = False) -> dict:
        """Convert to dictionary. The answer is omitted unless requested."""
        result = {
            "id": self.id,
            "type": self.type.value,
            "question": self.question,
            "time_limit": self.time_limit,
        }
        if include_answer:
            result["answer"] = self.answer
        return result


TYPING_PHRASES = [
    "hack the matrix",
    "access granted",
    "firewall bypassed",
    "system breach detected",
    "decryption complete",
    "neural network activated",
    "quantum encryption",
    "cyber security protocol",
    "data stream intercepted",
    "mainframe compromised",
    "digital fortress",
    "code injection successful",
    "backdoor established",
    "root access obtained",
    "vulnerability exploited",
]


def _puzzle_id(rng: random.Random) -> str:
    return uuid.UUID(int=rng.getrandbits(128), version=4).hex[:12]


def generate_math_puzzle(rng: random.Random) -> Puzzle:
    """Addition, subtraction or multiplication with small operands."""
    operation = rng.choice(["+", "-", "*"])

    if operation == "+":
        num1 = rng.randint(1, 50)
        num2 = rng.randint(1, 50)
        answer = num1 + num2
        question = f"{num1} + {num2} = ?"
    elif operation == "-":
        num1 = rng.randint(25, 74)
        num2 = rng.randint(1, 25)
        answer = num1 - num2
        question = f"{num1} - {num2} = ?"
    else:
        num1 = rng.randint(1, 12)
        num2 = rng.randint(1, 12)
        answer = num1 * num2
        question = f"{num1} × {num2} = ?"

    return Puzzle(
        id=_puzzle_id(rng),
        type=PuzzleType.MATH,
        question=question,
        answer=str(answer),
        time_limit=15,
    )


def generate_typing_puzzle(rng: random.Random) -> Puzzle:
    """Type a phrase back exactly."""
    phrase = rng.choice(TYPING_PHRASES)
    return Puzzle(
        id=_puzzle_id(rng),
        type=PuzzleType.TYPING,
        question=f'Type: "{phrase}"',
        answer=phrase,
        time_limit=20,
    )


def generate_binary_puzzle(rng: random.Random) -> Puzzle:
    """Convert a byte value to or from binary."""
    number = rng.randint(1, 255)
    binary = format(number, "b")

    if rng.random() > 0.5:
        question = f"Convert {number} to binary:"
        answer = binary
    else:
        question = f"Convert binary {binary} to decimal:"
        answer = str(number)

    return Puzzle(
        id=_puzzle_id(rng),
        type=PuzzleType.MATH,
        question=question,
        answer=answer,
        time_limit=25,
    )


def generate_hex_puzzle(rng: random.Random) -> Puzzle:
    """Convert a byte value to hexadecimal."""
    number = rng.randint(1, 255)
    return Puzzle(
        id=_puzzle_id(rng),
        type=PuzzleType.MATH,
        question=f"Convert {number} to hexadecimal:",
        answer=format(number, "X"),
        time_limit=20,
    )


PUZZLE_GENERATORS: list[Callable[[random.Random], Puzzle]] = [
    generate_math_puzzle,
    generate_typing_puzzle,
    generate_binary_puzzle,
    generate_hex_puzzle,
]


def generate_random_puzzle(rng: Optional[random.Random] = None) -> Puzzle:
    """Pick any puzzle kind uniformly."""
    rng = rng or random.Random()
    generator = rng.choice(PUZZLE_GENERATORS)
    return generator(rng)


def get_puzzle_by_difficulty(
    difficulty: PuzzleDifficulty | str,
    rng: Optional[random.Random] = None,
) -> Puzzle:
    """
    Get a puzzle for a difficulty tier.

    easy: math or typing, evenly.
    medium: mostly binary, otherwise math.
    hard: mostly hex, otherwise binary.
    """
    rng = rng or random.Random()
    difficulty = PuzzleDifficulty(difficulty)

    if difficulty == PuzzleDifficulty.EASY:
        if rng.random() > 0.5:
            return generate_math_puzzle(rng)
        return generate_typing_puzzle(rng)
    if difficulty == PuzzleDifficulty.MEDIUM:
        if rng.random() > 0.3:
            return generate_binary_puzzle(rng)
        return generate_math_puzzle(rng)
    if rng.random() > 0.3:
        return generate_hex_puzzle(rng)
    return generate_binary_puzzle(rng)


def _as_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except ValueError:
        return None


def validate_answer(puzzle: Puzzle, user_answer: str) -> bool:
    """
    Check an answer.

    Comparison ignores surrounding whitespace and case. Math puzzles also
    accept any answer with the same integer value, so "007" matches "7".
    """
    clean_answer = user_answer.strip().lower()
    correct_answer = puzzle.answer.lower()

    if clean_answer == correct_answer:
        return True
    if puzzle.type == PuzzleType.TYPING:
        return False

    given = _as_int(clean_answer)
    expected = _as_int(correct_answer)
    return given is not None and given == expected
