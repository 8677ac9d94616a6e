from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
import logging
from pathlib import Path

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen.canvas import Canvas

from PIL import Image

from .generator import FREE, GRID_SIZE, LETTERS, Card
from .qr import load_qr


logger = logging.getLogger(__name__)

FREE_FILL_RGB = (50 / 255, 140 / 255, 248 / 255)  # #328CF8
FOOTER_RGB = (200 / 255, 200 / 255, 200 / 255)


class AssetError(RuntimeError):
    pass


@dataclass(frozen=True)
class RenderOptions:
    title: str
    font_regular: Path | None = None
    font_bold: Path | None = None
    logo_path: Path | None = None
    qr_url: str | None = None
    qr_image_path: Path | None = None


@dataclass(frozen=True)
class _Fonts:
    regular: str
    bold: str


def _register_fonts(opts: RenderOptions) -> _Fonts:
    """Register the configured TTF fonts, falling back to Helvetica."""
    regular, bold = "Helvetica", "Helvetica-Bold"
    for attr, name in (("font_regular", "BingoSans"), ("font_bold", "BingoSans-Bold")):
        path: Path | None = getattr(opts, attr)
        if path is None:
            continue
        try:
            pdfmetrics.registerFont(TTFont(name, str(path)))
        except Exception as exc:
            raise AssetError(f"Could not load font {path.name}: {exc}") from exc
        if attr == "font_regular":
            regular = name
        else:
            bold = name
    return _Fonts(regular=regular, bold=bold)


def _warn_if_unencodable(title: str, fonts: _Fonts) -> None:
    # Standard Type 1 fonts only cover WinAnsi (cp1252).
    if fonts.bold in pdfmetrics.standardFonts:
        try:
            title.encode("cp1252")
        except UnicodeEncodeError:
            logger.warning(
                "Title %r has characters the built-in %s font cannot draw; set BINGO_FONT_BOLD to a TTF that covers them",
                title,
                fonts.bold,
            )


def _load_logo(path: Path) -> Image.Image:
    img = Image.open(path).convert("RGBA")
    bg = Image.new("RGBA", img.size, (255, 255, 255, 255))
    bg.alpha_composite(img)
    return bg.convert("RGB")


def _load_decoration(kind: str, loader) -> ImageReader | None:
    try:
        img = loader()
    except Exception as exc:
        logger.warning("Could not add %s to PDF: %s", kind, exc)
        return None
    return ImageReader(img) if img is not None else None


def _draw_card(
    canvas: Canvas,
    card: Card,
    *,
    fonts: _Fonts,
    top: float,
    margin: float,
    size: float,
) -> None:
    cell = size / GRID_SIZE
    grid_y = top - size

    canvas.setStrokeColorRGB(0, 0, 0)
    canvas.setLineWidth(1 * mm)
    canvas.rect(margin, grid_y, size, size, stroke=1, fill=0)

    canvas.setLineWidth(0.5 * mm)
    for i in range(1, GRID_SIZE):
        canvas.line(margin + i * cell, grid_y, margin + i * cell, top)
        canvas.line(margin, top - i * cell, margin + size, top - i * cell)

    canvas.setFont(fonts.bold, 18)
    for row, values in enumerate(card.rows):
        for col, value in enumerate(values):
            x0 = margin + col * cell
            y0 = top - (row + 1) * cell
            if value == FREE:
                canvas.setFillColorRGB(*FREE_FILL_RGB)
                canvas.rect(x0, y0, cell, cell, stroke=1, fill=1)
                canvas.setFillColorRGB(1, 1, 1)
            canvas.drawCentredString(x0 + cell / 2, y0 + cell / 2 - 2 * mm, str(value))
            if value == FREE:
                canvas.setFillColorRGB(0, 0, 0)


def render_cards_pdf(cards: list[Card], opts: RenderOptions) -> bytes:
    # Fonts are required assets; fail before drawing anything.
    fonts = _register_fonts(opts)
    _warn_if_unencodable(opts.title, fonts)

    buf = BytesIO()
    canvas = Canvas(buf, pagesize=A4)
    canvas.setTitle(f"{opts.title} Bingo Cards")
    page_w, page_h = A4

    margin = 10 * mm
    card_size = page_w - 2 * margin
    cell = card_size / GRID_SIZE
    grid_top = page_h - margin - 30 * mm
    footer_y = 25 * mm

    logo = None
    if opts.logo_path is not None:
        logo = _load_decoration("logo", lambda: _load_logo(opts.logo_path))
    qr = _load_decoration("QR code", lambda: load_qr(url=opts.qr_url, image_path=opts.qr_image_path))

    total = len(cards)
    for index, card in enumerate(cards, start=1):
        canvas.setFillColorRGB(0, 0, 0)
        canvas.setFont(fonts.bold, 24)
        canvas.drawCentredString(page_w / 2, page_h - margin - 8 * mm, opts.title)

        canvas.setFont(fonts.bold, 20)
        for i, letter in enumerate(LETTERS):
            canvas.drawCentredString(margin + i * cell + cell / 2, page_h - margin - 25 * mm, letter)

        _draw_card(canvas, card, fonts=fonts, top=grid_top, margin=margin, size=card_size)

        if total > 1:
            canvas.setFont(fonts.regular, 10)
            canvas.drawCentredString(page_w / 2, grid_top - card_size - 10 * mm, f"Card {index} of {total}")

        canvas.setStrokeColorRGB(*FOOTER_RGB)
        canvas.setLineWidth(0.5 * mm)
        canvas.line(margin, footer_y, page_w - margin, footer_y)

        # QR and logo share a vertical center line below the footer rule.
        logo_h = 7.5 * mm
        logo_y = footer_y - 5 * mm - logo_h
        if qr is not None:
            qr_size = 15 * mm
            canvas.drawImage(qr, margin, logo_y + logo_h / 2 - qr_size / 2, width=qr_size, height=qr_size)
        if logo is not None:
            iw, ih = logo.getSize()
            logo_w = logo_h * iw / ih
            canvas.drawImage(logo, page_w - margin - logo_w, logo_y, width=logo_w, height=logo_h, mask="auto")

        canvas.showPage()

    canvas.save()
    logger.info("Rendered %d bingo card page(s) for %r", total, opts.title)
    return buf.getvalue()
