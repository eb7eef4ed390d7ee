"""
Item placement: chips, firewalls and lockers on carved path cells.

Path cells are shuffled once and walked in order. Every cell handed to a
category is claimed, and claimed cells are skipped, so no two items ever share
a cell. Categories are filled chips first, then firewalls, then lockers; when
a small maze runs out of free cells the later categories get fewer items.
"""

import random
from dataclasses import dataclass, field
from typing import Iterator, Optional

from maze_escape.core.grid import Grid, Position

CHIP_RANGE = (5, 8)
FIREWALL_RANGE = (2, 4)
LOCKER_RANGE = (3, 5)


@dataclass(frozen=True)
class Locker:
    """A locker cell and its id."""
    x: int
    y: int
    id: str

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y, "id": self.id}


@dataclass
class PlacedItems:
    """Coordinates of everything placed on the grid."""
    chips: list[Position] = field(default_factory=list)
    firewalls: list[Position] = field(default_factory=list)
    lockers: list[Locker] = field(default_factory=list)


def locker_id_for(x: int, y: int) -> str:
    """Locker ids are derived from coordinates, so they are unique per maze."""
    return f"locker_{x}_{y}"


def _take(pool: Iterator[Position], claimed: set[Position], count: int) -> list[Position]:
    """Take up to count unclaimed positions from pool."""
    taken = []
    while len(taken) < count:
        pos = next(pool, None)
        if pos is None:
            break
        if pos in claimed:
            continue
        claimed.add(pos)
        taken.append(pos)
    return taken


def place_items(
    grid: Grid,
    rng: Optional[random.Random] = None,
) -> PlacedItems:
    """
    Scatter chips, firewalls and lockers onto path cells.

    Every path cell is a candidate, the start and exit included.

    Args:
        grid: Carved grid. Cell flags are set in place.
        rng: Random source. Defaults to a fresh ``random.Random()``.

    Returns:
        PlacedItems listing every placed coordinate.
    """
    rng = rng or random.Random()

    shuffled = [cell.position for cell in grid.path_cells()]
    rng.shuffle(shuffled)
    pool = iter(shuffled)
    claimed: set[Position] = set()

    chip_count = rng.randint(*CHIP_RANGE)
    firewall_count = rng.randint(*FIREWALL_RANGE)
    locker_count = rng.randint(*LOCKER_RANGE)

    items = PlacedItems()

    for pos in _take(pool, claimed, chip_count):
        grid.rows[pos.y][pos.x].has_chip = True
        items.chips.append(pos)

    for pos in _take(pool, claimed, firewall_count):
        grid.rows[pos.y][pos.x].has_firewall = True
        items.firewalls.append(pos)

    for pos in _take(pool, claimed, locker_count):
        cell = grid.rows[pos.y][pos.x]
        cell.has_locker = True
        cell.locker_id = locker_id_for(pos.x, pos.y)
        items.lockers.append(Locker(pos.x, pos.y, cell.locker_id))

    return items
