from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from dotenv import load_dotenv


APP_DIR = Path(__file__).resolve().parent.parent
DEFAULT_ASSETS_DIR = APP_DIR / "assets"
DEFAULT_MAX_CARDS = 1000


@dataclass(frozen=True)
class Settings:
    secret_key: str
    assets_dir: Path
    font_regular: Path | None
    font_bold: Path | None
    logo_path: Path | None
    qr_url: str | None
    qr_image_path: Path | None
    max_cards: int = DEFAULT_MAX_CARDS


def _env(name: str) -> str | None:
    value = os.environ.get(name, "").strip()
    return value or None


def _asset_path(name: str, assets_dir: Path, default_filename: str | None = None) -> Path | None:
    """Explicit settings are returned as-is; defaults only when present on disk."""
    value = _env(name)
    if value:
        path = Path(value)
        return path if path.is_absolute() else assets_dir / path
    if default_filename:
        candidate = assets_dir / default_filename
        if candidate.exists():
            return candidate
    return None


def load_settings(*, use_dotenv: bool = True) -> Settings:
    if use_dotenv:
        load_dotenv()

    assets_dir = Path(_env("BINGO_ASSETS_DIR") or DEFAULT_ASSETS_DIR)

    max_cards_raw = _env("BINGO_MAX_CARDS")
    try:
        max_cards = int(max_cards_raw) if max_cards_raw else DEFAULT_MAX_CARDS
    except ValueError as exc:
        raise RuntimeError(f"BINGO_MAX_CARDS must be a whole number, got {max_cards_raw!r}") from exc
    if max_cards <= 0:
        raise RuntimeError("BINGO_MAX_CARDS must be > 0")

    return Settings(
        secret_key=_env("FLASK_SECRET_KEY") or "dev-secret-key",
        assets_dir=assets_dir,
        font_regular=_asset_path("BINGO_FONT_REGULAR", assets_dir, "fonts/Asap-Regular.ttf"),
        font_bold=_asset_path("BINGO_FONT_BOLD", assets_dir, "fonts/Asap-Bold.ttf"),
        logo_path=_asset_path("BINGO_LOGO_PATH", assets_dir, "img/logo.png"),
        qr_url=_env("BINGO_QR_URL"),
        qr_image_path=_asset_path("BINGO_QR_IMAGE", assets_dir, "img/app-qr.png"),
        max_cards=max_cards,
    )
