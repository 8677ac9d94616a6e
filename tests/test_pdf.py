import logging
from pathlib import Path
import re

from PIL import Image
import pytest

from number_bingo.core.generator import generate_cards
from number_bingo.core.pdf import AssetError, RenderOptions, render_cards_pdf


def _page_count(pdf: bytes) -> int:
    return len(re.findall(rb"/Type /Page\b", pdf))


def test_render_cards_pdf_one_page_per_card():
    cards = generate_cards(count=3, include_free_space=True, seed=1)
    pdf = render_cards_pdf(cards, RenderOptions(title="BINGO"))
    assert pdf.startswith(b"%PDF-")
    assert _page_count(pdf) == 3


def test_render_cards_pdf_without_free_space_and_with_qr_url():
    cards = generate_cards(count=1, include_free_space=False, seed=2)
    pdf = render_cards_pdf(cards, RenderOptions(title="Quiz Night", qr_url="https://example.com/app"))
    assert pdf.startswith(b"%PDF-")
    assert _page_count(pdf) == 1


def test_render_cards_pdf_with_logo_and_qr_image(tmp_path: Path):
    logo = tmp_path / "logo.png"
    Image.new("RGBA", (723, 306), (0, 0, 0, 255)).save(logo)
    qr = tmp_path / "qr.png"
    Image.new("RGB", (64, 64), (255, 255, 255)).save(qr)

    cards = generate_cards(count=2, seed=3)
    pdf = render_cards_pdf(cards, RenderOptions(title="BINGO", logo_path=logo, qr_image_path=qr))
    assert _page_count(pdf) == 2


def test_missing_decorations_are_skipped(tmp_path: Path, caplog):
    cards = generate_cards(count=1, seed=4)
    opts = RenderOptions(title="BINGO", logo_path=tmp_path / "nope.png", qr_image_path=tmp_path / "nope-qr.png")
    with caplog.at_level(logging.WARNING, logger="number_bingo.core.pdf"):
        pdf = render_cards_pdf(cards, opts)
    assert pdf.startswith(b"%PDF-")
    assert "logo" in caplog.text
    assert "QR code" in caplog.text


def test_missing_font_aborts_export(tmp_path: Path):
    cards = generate_cards(count=2, seed=5)
    with pytest.raises(AssetError):
        render_cards_pdf(cards, RenderOptions(title="BINGO", font_bold=tmp_path / "Asap-Bold.ttf"))


def test_title_outside_builtin_font_is_logged(caplog):
    cards = generate_cards(count=1, seed=6)
    with caplog.at_level(logging.WARNING, logger="number_bingo.core.pdf"):
        pdf = render_cards_pdf(cards, RenderOptions(title="日本語ビンゴ"))
    assert pdf.startswith(b"%PDF-")
    assert "BINGO_FONT_BOLD" in caplog.text


def test_latin_title_does_not_warn(caplog):
    cards = generate_cards(count=1, seed=7)
    with caplog.at_level(logging.WARNING, logger="number_bingo.core.pdf"):
        render_cards_pdf(cards, RenderOptions(title="Café Bingo"))
    assert "BINGO_FONT_BOLD" not in caplog.text
