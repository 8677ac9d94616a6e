from __future__ import annotations

from dataclasses import dataclass
import re

from .generator import CENTER, COLUMN_RANGES, FREE, GRID_SIZE, Card, Cell


DEFAULT_TITLE = "BINGO"
_WS_RE = re.compile(r"\s+")
_FILENAME_UNSAFE_RE = re.compile(r"[^\w\s-]")
_TOKEN_SEP = "."


class InvalidCard(ValueError):
    pass


@dataclass(frozen=True)
class ExportRequest:
    title: str
    include_free_space: bool
    count: int
    seed: int | None


def normalize_title(raw: str | None) -> str:
    title = _WS_RE.sub(" ", raw or "").strip()
    return title or DEFAULT_TITLE


def parse_card_count(raw: str | int | None, *, maximum: int | None = None) -> int:
    """Invalid or non-positive counts fall back to a single card."""
    try:
        count = int(str(raw).strip())
    except (TypeError, ValueError):
        return 1
    if count <= 0:
        return 1
    if maximum is not None:
        count = min(count, maximum)
    return count


def parse_seed(raw: str | None) -> int | None:
    text = (raw or "").strip()
    if not text:
        return None
    return int(text)


def parse_export_request(
    *,
    title: str | None,
    free_space: bool,
    count: str | int | None,
    seed: str | None = None,
    max_cards: int | None = None,
) -> ExportRequest:
    return ExportRequest(
        title=normalize_title(title),
        include_free_space=free_space,
        count=parse_card_count(count, maximum=max_cards),
        seed=parse_seed(seed),
    )


def export_filename(title: str) -> str:
    safe = _FILENAME_UNSAFE_RE.sub("", normalize_title(title)).strip()
    safe = _WS_RE.sub("-", safe) or DEFAULT_TITLE
    return f"{safe}-Bingo-Cards.pdf"


def card_to_token(card: Card) -> str:
    return _TOKEN_SEP.join(str(value) for row in card.rows for value in row)


def parse_card_token(token: str, *, include_free_space: bool) -> Card:
    parts = [part.strip() for part in (token or "").split(_TOKEN_SEP)]
    if len(parts) != GRID_SIZE * GRID_SIZE:
        raise InvalidCard(f"Expected {GRID_SIZE * GRID_SIZE} cells, got {len(parts)}")

    cells: list[Cell] = []
    for part in parts:
        if part == FREE:
            cells.append(FREE)
            continue
        try:
            cells.append(int(part))
        except ValueError as exc:
            raise InvalidCard(f"Invalid cell value: {part!r}") from exc

    rows = tuple(tuple(cells[r * GRID_SIZE : (r + 1) * GRID_SIZE]) for r in range(GRID_SIZE))
    card = Card(rows=rows)
    _validate_card(card, include_free_space=include_free_space)
    return card


def _validate_card(card: Card, *, include_free_space: bool) -> None:
    if card.has_free_space != include_free_space:
        raise InvalidCard("Free space does not match the selected option")

    for col, (low, high) in enumerate(COLUMN_RANGES):
        values = card.column(col)
        numbers = [v for row, v in enumerate(values) if (row, col) != CENTER or v != FREE]
        if any(v == FREE for v in numbers):
            raise InvalidCard(f"{FREE} is only allowed in the center cell")
        if any(not low <= v <= high for v in numbers):
            raise InvalidCard(f"Column {col} values must lie within {low}-{high}")
        if len(set(numbers)) != len(numbers):
            raise InvalidCard(f"Column {col} contains duplicate numbers")
