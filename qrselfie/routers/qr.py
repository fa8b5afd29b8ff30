from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from qrselfie.context import AppContext, get_context
from qrselfie.errors import InternalError, ValidationError
from qrselfie.schemas.photo import ErrorOut
from qrselfie.services.metrics import record_qr
from qrselfie.services.qr import QREncodeError, render_qr_png

router = APIRouter(prefix="/api", tags=["qr"])


@router.get(
    "/qr",
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}},
        400: {"model": ErrorOut},
        500: {"model": ErrorOut},
    },
)
async def qr_png(text: Optional[str] = Query(default=None), ctx: AppContext = Depends(get_context)):
    """Render ``text`` as a PNG QR code."""
    if not text:
        raise ValidationError("Missing text")
    try:
        png = render_qr_png(text, width=ctx.settings.QR_WIDTH, margin=ctx.settings.QR_MARGIN)
    except QREncodeError as e:
        record_qr("error")
        raise InternalError("QR generation failed") from e
    record_qr("ok")
    return Response(content=png, media_type="image/png")
