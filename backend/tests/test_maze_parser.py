"""Tests for the maze text codec."""

import random
import tempfile
from pathlib import Path

import pytest

from maze_escape.core.grid import Position
from maze_escape.core.maze_generator import generate_maze
from maze_escape.core.maze_parser import (
    MazeParseError,
    MazeValidationError,
    load_maze_file,
    parse_maze_text,
    render_maze_text,
    validate_maze_text,
)


# Sample maze for testing
SIMPLE_MAZE = """XXXXX
XSC.X
XFX.X
XL.EX
XXXXX"""


class TestMazeParser:
    """Tests for maze parser functionality."""

    def test_parse_simple_maze(self):
        """Test parsing a simple valid maze."""
        maze = parse_maze_text(SIMPLE_MAZE)

        assert maze.width == 5
        assert maze.height == 5
        assert maze.player_start == Position(1, 1)
        assert maze.exit == Position(3, 3)
        assert maze.chips == (Position(2, 1),)
        assert maze.firewalls == (Position(1, 2),)
        assert [locker.id for locker in maze.lockers] == ["locker_1_3"]

    def test_parse_sets_cell_flags(self):
        """Test that markers become flags on path cells."""
        maze = parse_maze_text(SIMPLE_MAZE)
        grid = maze.grid

        assert grid.rows[3][3].is_exit
        assert grid.rows[1][2].has_chip
        assert grid.rows[2][1].has_firewall
        assert grid.rows[3][1].has_locker
        assert grid.rows[1][1].is_path
        assert not grid.rows[2][2].is_path

    def test_render_round_trip(self):
        """Test that rendering parsed text gives the same text back."""
        assert render_maze_text(parse_maze_text(SIMPLE_MAZE)) == SIMPLE_MAZE

    def test_generated_maze_survives_round_trip(self, rng):
        """Test a generated maze keeps its start, exit and items through text."""
        maze = generate_maze(21, 21, rng=rng)
        parsed = parse_maze_text(render_maze_text(maze))

        assert parsed.player_start == maze.player_start
        assert parsed.exit == maze.exit
        markers = {maze.player_start, maze.exit}
        assert set(parsed.chips) == set(maze.chips) - markers
        assert set(parsed.firewalls) == set(maze.firewalls) - markers
        assert {lk.position for lk in parsed.lockers} == (
            {lk.position for lk in maze.lockers} - markers
        )
        assert [c.type for c in parsed.grid] == [c.type for c in maze.grid]

    @pytest.mark.parametrize("seed", range(10))
    def test_smallest_playable_maze_round_trip(self, seed):
        """Test a 5x5 maze parses back with its start, exit and layout."""
        maze = generate_maze(5, 5, rng=random.Random(seed))
        parsed = parse_maze_text(render_maze_text(maze))

        assert parsed.player_start == maze.player_start
        assert parsed.exit == maze.exit
        assert [c.type for c in parsed.grid] == [c.type for c in maze.grid]

    def test_items_under_start_and_exit_are_not_written(self):
        """Test the start and exit markers take precedence over items."""
        maze = parse_maze_text(SIMPLE_MAZE)
        maze.grid.rows[1][1].has_chip = True
        maze.grid.rows[3][3].has_locker = True

        lines = render_maze_text(maze).split("\n")

        assert lines[1][1] == "S"
        assert lines[3][3] == "E"

    def test_parse_ignores_surrounding_blank_lines(self):
        """Test leading and trailing newlines are dropped."""
        maze = parse_maze_text("\n\n" + SIMPLE_MAZE + "\r\n\n")
        assert (maze.width, maze.height) == (5, 5)

    def test_parse_indented_text_reports_character(self):
        """Test indentation is reported as an invalid character on every row."""
        indented = "\n".join("  " + line for line in SIMPLE_MAZE.split("\n"))
        with pytest.raises(MazeValidationError, match=r"Invalid character ' ' at position \(0, 0\)"):
            parse_maze_text(indented)

    def test_parse_empty_maze_raises_error(self):
        """Test that empty maze raises MazeParseError."""
        with pytest.raises(MazeParseError, match="Maze text is empty"):
            parse_maze_text("")

    def test_parse_whitespace_only_raises_error(self):
        """Test that whitespace-only maze raises MazeParseError."""
        with pytest.raises(MazeParseError, match="Maze text is empty"):
            parse_maze_text("   \n   \n   ")

    def test_parse_ragged_rows_raises_error(self):
        """Test that rows must all be the same length."""
        maze = """XXXXX
XS.EX
XXXX"""
        with pytest.raises(MazeParseError, match="Row 2 has length 4"):
            parse_maze_text(maze)

    def test_parse_maze_missing_start_raises_error(self):
        """Test that maze without start position raises error."""
        maze = """XXXXX
X...X
X.X.X
X..EX
XXXXX"""
        with pytest.raises(MazeValidationError, match="must have a start position"):
            parse_maze_text(maze)

    def test_parse_maze_missing_exit_raises_error(self):
        """Test that maze without exit position raises error."""
        maze = """XXXXX
XS..X
X.X.X
X...X
XXXXX"""
        with pytest.raises(MazeValidationError, match="must have an exit position"):
            parse_maze_text(maze)

    def test_parse_maze_multiple_starts_raises_error(self):
        """Test that maze with multiple starts raises error."""
        maze = """XXXXX
XS.SX
X.X.X
X..EX
XXXXX"""
        with pytest.raises(MazeValidationError, match="Multiple start positions"):
            parse_maze_text(maze)

    def test_parse_maze_multiple_exits_raises_error(self):
        """Test that maze with multiple exits raises error."""
        maze = """XXXXX
XS..X
X.X.X
XE.EX
XXXXX"""
        with pytest.raises(MazeValidationError, match="Multiple exit positions"):
            parse_maze_text(maze)

    def test_parse_maze_invalid_char_raises_error(self):
        """Test that maze with invalid character raises error."""
        maze = """XXXXX
XS..X
X.X?X
X..EX
XXXXX"""
        with pytest.raises(MazeValidationError, match="Invalid character"):
            parse_maze_text(maze)

    def test_parse_unreachable_exit_raises_error(self):
        """Test that the exit must be reachable from the start."""
        maze = """XXXXX
XS.XX
XXXXX
XX.EX
XXXXX"""
        with pytest.raises(MazeValidationError, match="not reachable"):
            parse_maze_text(maze)


class TestLoadMazeFile:
    """Tests for loading maze files from filesystem."""

    def test_load_maze_file(self):
        """Test loading a maze from a file."""
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".txt", delete=False
        ) as f:
            f.write(SIMPLE_MAZE)
            f.flush()

        try:
            maze = load_maze_file(f.name)
            assert maze.width == 5
            assert maze.player_start == Position(1, 1)
        finally:
            Path(f.name).unlink()

    def test_load_maze_file_not_found(self):
        """Test that FileNotFoundError is raised for missing file."""
        with pytest.raises(FileNotFoundError):
            load_maze_file("/nonexistent/path/maze.txt")

    def test_load_directory_raises_parse_error(self):
        """Test that a directory is not a maze file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(MazeParseError, match="not a file"):
                load_maze_file(tmpdir)


class TestValidateMazeText:
    """Tests for maze validation helper."""

    def test_validate_valid_maze(self):
        """Test validation of valid maze returns True."""
        is_valid, error = validate_maze_text(SIMPLE_MAZE)
        assert is_valid is True
        assert error is None

    def test_validate_invalid_maze(self):
        """Test validation of invalid maze returns False with error."""
        invalid_maze = """XXXXX
X...X
X.X.X
X...X
XXXXX"""
        is_valid, error = validate_maze_text(invalid_maze)
        assert is_valid is False
        assert "start position" in error
