from __future__ import annotations

from dataclasses import dataclass
import random
from typing import Protocol


FREE = "FREE"
LETTERS = ("B", "I", "N", "G", "O")
COLUMN_RANGES: tuple[tuple[int, int], ...] = (
    (1, 15),
    (16, 30),
    (31, 45),
    (46, 60),
    (61, 75),
)
GRID_SIZE = 5
CENTER = (2, 2)

Cell = int | str


class InvalidArgument(ValueError):
    pass


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


@dataclass(frozen=True)
class Card:
    rows: tuple[tuple[Cell, ...], ...]

    def cell(self, row: int, col: int) -> Cell:
        return self.rows[row][col]

    def column(self, col: int) -> tuple[Cell, ...]:
        return tuple(row[col] for row in self.rows)

    @property
    def has_free_space(self) -> bool:
        return self.cell(*CENTER) == FREE

    def numbers(self) -> list[int]:
        return [value for row in self.rows for value in row if value != FREE]


def sample_unique(minimum: int, maximum: int, k: int, *, rng: RandomSource | None = None) -> list[int]:
    """Return ``k`` distinct integers drawn uniformly from ``[minimum, maximum]``.

    The whole range is shuffled with Fisher-Yates and the first ``k`` values
    are kept, so the order is a byproduct of the shuffle.
    """
    if minimum > maximum:
        raise InvalidArgument(f"minimum ({minimum}) must be <= maximum ({maximum})")
    size = maximum - minimum + 1
    if k < 0 or k > size:
        raise InvalidArgument(f"Cannot draw {k} unique values from a range of {size}")

    rng = rng or random.Random()
    numbers = list(range(minimum, maximum + 1))
    for i in range(len(numbers) - 1, 0, -1):
        j = rng.randint(0, i)
        numbers[i], numbers[j] = numbers[j], numbers[i]
    return numbers[:k]


def generate_card(include_free_space: bool = True, *, rng: RandomSource | None = None) -> Card:
    rng = rng or random.Random()
    grid: list[list[Cell]] = [[0] * GRID_SIZE for _ in range(GRID_SIZE)]

    for col, (low, high) in enumerate(COLUMN_RANGES):
        for row, value in enumerate(sample_unique(low, high, GRID_SIZE, rng=rng)):
            grid[row][col] = value

    if include_free_space:
        # The number drawn for the center is dropped, not moved elsewhere.
        row, col = CENTER
        grid[row][col] = FREE

    return Card(rows=tuple(tuple(row) for row in grid))


def generate_cards(
    *,
    count: int,
    include_free_space: bool = True,
    seed: int | None = None,
    rng: RandomSource | None = None,
) -> list[Card]:
    if count < 0:
        raise InvalidArgument("count must be >= 0")
    if seed is not None and rng is not None:
        raise InvalidArgument("Pass either seed or rng, not both")

    if rng is None:
        rng = random.Random(seed)
    return [generate_card(include_free_space, rng=rng) for _ in range(count)]
