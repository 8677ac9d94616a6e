from __future__ import annotations

from pathlib import Path

from PIL import Image
import qrcode


def make_qr_image(data: str, *, box_size: int = 8, border: int = 1) -> Image.Image:
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)
    return qr.make_image(fill_color="black", back_color="white").convert("RGB")


def load_qr(*, url: str | None, image_path: Path | None) -> Image.Image | None:
    """A pre-rendered QR image wins over generating one from ``url``."""
    if image_path is not None:
        return Image.open(image_path).convert("RGB")
    if url:
        return make_qr_image(url)
    return None
