import io

import qrcode
from PIL import Image
from qrcode.exceptions import DataOverflowError


class QREncodeError(Exception):
    pass


def render_qr_png(text: str, width: int = 256, margin: int = 1) -> bytes:
    """
    Encode text as a square PNG of exactly ``width`` pixels, with a quiet
    zone of ``margin`` modules.
    """
    if not text:
        raise QREncodeError("Cannot encode empty text")

    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=1,
        border=margin,
    )
    try:
        qr.add_data(text)
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as e:
        raise QREncodeError(f"Text does not fit in a QR code: {e}") from e

    img = qr.make_image(fill_color="black", back_color="white").get_image()
    img = img.convert("L").resize((width, width), Image.NEAREST)

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
