from collections import Counter
import random

import pytest

from number_bingo.core.generator import (
    CENTER,
    COLUMN_RANGES,
    FREE,
    InvalidArgument,
    generate_card,
    generate_cards,
    sample_unique,
)


class _NoSwapRandom:
    """Always picks j == i, so the shuffle leaves the range in order."""

    def randint(self, a, b):
        return b


@pytest.mark.parametrize("minimum,maximum,k", [(1, 15, 5), (1, 1, 1), (10, 20, 0), (-5, 5, 11), (61, 75, 15)])
def test_sample_unique_returns_k_distinct_values_in_range(minimum, maximum, k):
    values = sample_unique(minimum, maximum, k, rng=random.Random(7))
    assert len(values) == k
    assert len(set(values)) == k
    assert all(minimum <= v <= maximum for v in values)


@pytest.mark.parametrize("minimum,maximum,k", [(1, 15, 16), (1, 5, -1), (10, 1, 1)])
def test_sample_unique_rejects_impossible_requests(minimum, maximum, k):
    with pytest.raises(InvalidArgument):
        sample_unique(minimum, maximum, k)


def test_invalid_argument_is_a_value_error():
    with pytest.raises(ValueError):
        sample_unique(1, 3, 4)


def test_sample_unique_is_roughly_uniform():
    rng = random.Random(2024)
    trials = 15000
    counts = Counter()
    for _ in range(trials):
        counts.update(sample_unique(1, 15, 5, rng=rng))

    expected = trials * 5 / 15
    assert set(counts) == set(range(1, 16))
    for value, seen in counts.items():
        assert abs(seen - expected) / expected < 0.05, value


def test_sample_unique_uses_injected_source():
    assert sample_unique(31, 45, 5, rng=_NoSwapRandom()) == [31, 32, 33, 34, 35]


def test_generate_card_columns_stay_in_range_and_unique():
    rng = random.Random(99)
    for _ in range(200):
        card = generate_card(False, rng=rng)
        for col, (low, high) in enumerate(COLUMN_RANGES):
            column = card.column(col)
            assert len(set(column)) == 5
            assert all(isinstance(v, int) and low <= v <= high for v in column)


def test_generate_card_free_space_discards_center_number():
    card = generate_card(True, rng=_NoSwapRandom())
    assert card.cell(*CENTER) == FREE
    assert card.column(2) == (31, 32, FREE, 34, 35)
    assert 33 not in card.numbers()


def test_free_space_always_in_center():
    rng = random.Random(5)
    for _ in range(100):
        card = generate_card(True, rng=rng)
        assert card.has_free_space
        assert len(card.numbers()) == 24
        assert [v for row in card.rows for v in row].count(FREE) == 1


def test_without_free_space_center_is_an_n_column_number():
    card = generate_card(False, rng=random.Random(1))
    center = card.cell(*CENTER)
    assert isinstance(center, int)
    assert 31 <= center <= 45
    assert not card.has_free_space
    assert len(card.numbers()) == 25


def test_generate_cards_count_and_options():
    cards = generate_cards(count=12, include_free_space=True, seed=123)
    assert len(cards) == 12
    for card in cards:
        assert card.has_free_space
        assert len(card.numbers()) == 24
        for col, (low, high) in enumerate(COLUMN_RANGES):
            numbers = [v for v in card.column(col) if v != FREE]
            assert len(set(numbers)) == len(numbers)
            assert all(low <= v <= high for v in numbers)


def test_generate_cards_rejects_seed_with_rng():
    with pytest.raises(InvalidArgument):
        generate_cards(count=1, seed=1, rng=random.Random(1))


def test_generate_cards_zero_is_empty():
    assert generate_cards(count=0) == []


def test_generate_cards_rejects_negative_count():
    with pytest.raises(InvalidArgument):
        generate_cards(count=-1)


def test_generate_cards_seed_is_reproducible():
    first = generate_cards(count=5, include_free_space=False, seed=42)
    second = generate_cards(count=5, include_free_space=False, seed=42)
    assert first == second
