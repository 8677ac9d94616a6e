from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from number_bingo.config import load_settings
from number_bingo.core.generator import generate_cards
from number_bingo.core.parser import export_filename, normalize_title, parse_card_count
from number_bingo.core.pdf import RenderOptions, render_cards_pdf


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Export randomized 75-ball bingo cards to a PDF, one card per page.")
    parser.add_argument("--title", default="", help="Title printed on every card (default: BINGO)")
    parser.add_argument("--count", default="1", help="Number of cards; invalid or non-positive values mean 1")
    parser.add_argument(
        "--no-free-space",
        dest="free_space",
        action="store_false",
        help="Fill the center cell with a number instead of FREE",
    )
    parser.add_argument("--seed", type=int, default=None, help="Optional seed for reproducible PDFs")
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output PDF path (default: <title>-Bingo-Cards.pdf in the current directory)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str]) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings()
    title = normalize_title(args.title)
    count = parse_card_count(args.count, maximum=settings.max_cards)

    cards = generate_cards(count=count, include_free_space=args.free_space, seed=args.seed)
    pdf_bytes = render_cards_pdf(
        cards,
        RenderOptions(
            title=title,
            font_regular=settings.font_regular,
            font_bold=settings.font_bold,
            logo_path=settings.logo_path,
            qr_url=settings.qr_url,
            qr_image_path=settings.qr_image_path,
        ),
    )

    output: Path = args.output or Path(export_filename(title))
    output.write_bytes(pdf_bytes)
    print(f"Wrote {count} card(s) to {output}")
    return 0


def run() -> None:
    try:
        raise SystemExit(main(sys.argv[1:]))
    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        raise SystemExit(130)
    except Exception as exc:
        msg = str(exc).rstrip() or repr(exc)
        print(f"ERROR: {msg}", file=sys.stderr)
        raise SystemExit(2)


if __name__ == "__main__":
    run()
