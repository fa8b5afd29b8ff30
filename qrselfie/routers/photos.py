from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from qrselfie.context import AppContext, get_context
from qrselfie.errors import AppError, InternalError, NotFoundError, ValidationError
from qrselfie.schemas.photo import ErrorOut, MetaOut, UploadOut
from qrselfie.services.metrics import record_upload

router = APIRouter(prefix="/api", tags=["photos"])


@router.post(
    "/upload",
    response_model=UploadOut,
    responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
async def upload_photo(
    photo: Optional[UploadFile] = File(default=None),
    ctx: AppContext = Depends(get_context),
):
    """Store an uploaded photo and return its id and shareable view URL."""
    if photo is None:
        record_upload("rejected")
        raise ValidationError("No photo uploaded")

    content = await photo.read()
    if not content:
        record_upload("rejected")
        raise ValidationError("Empty file")

    try:
        record = await ctx.uploads.store(content, photo.content_type, photo.filename)
    except AppError:
        record_upload("error")
        raise
    except Exception as e:
        record_upload("error")
        raise InternalError("Upload failed") from e

    record_upload("ok")
    return UploadOut(id=record.id, viewUrl=ctx.view_url(record.id))


@router.get("/meta/{photo_id}", response_model=MetaOut, responses={404: {"model": ErrorOut}})
async def photo_meta(photo_id: str, ctx: AppContext = Depends(get_context)):
    rec = ctx.manifest.get(photo_id)
    if not rec:
        raise NotFoundError("Not found")
    return MetaOut(id=rec.id, imageUrl=ctx.image_url(rec.filename), viewUrl=ctx.view_url(rec.id))
