from html import escape

from fastapi import APIRouter, Depends, Response
from fastapi.responses import HTMLResponse

from qrselfie.context import AppContext, get_context
from qrselfie.errors import NotFoundError

router = APIRouter(tags=["view"])

VIEW_PAGE = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>QR Selfie Viewer</title>
  <link rel="stylesheet" href="/styles.css" />
</head>
<body data-photo-id="{photo_id}">
  <header>
    <a href="/" class="brand">QR Selfie</a>
  </header>
  <main>
    <section class="viewer">
      <img id="photo" alt="Selfie" />
      <div>
        <h2>Scan this QR</h2>
        <img id="qrImg" alt="QR code" />
        <p><a id="link" target="_blank" rel="noopener">Open link</a></p>
      </div>
    </section>
  </main>
  <script src="/view.js" defer></script>
</body>
</html>
"""


@router.get("/view/{photo_id}", response_class=HTMLResponse)
async def view_photo(photo_id: str, ctx: AppContext = Depends(get_context)):
    """Viewer page; the browser fills in photo, link and QR from /api/meta."""
    if photo_id not in ctx.manifest:
        raise NotFoundError("Not found")
    return HTMLResponse(VIEW_PAGE.format(photo_id=escape(photo_id, quote=True)))


@router.get("/favicon.ico", include_in_schema=False)
async def favicon():
    return Response(status_code=204)
