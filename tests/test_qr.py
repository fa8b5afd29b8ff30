import io

import cv2
import numpy as np
import pytest
from PIL import Image, ImageOps

from qrselfie.services.qr import QREncodeError, render_qr_png


def decode_qr(png: bytes) -> str:
    img = Image.open(io.BytesIO(png)).convert("L")
    # A wider quiet zone makes detection reliable at margin=1
    img = ImageOps.expand(img, border=48, fill=255)
    text, _points, _ = cv2.QRCodeDetector().detectAndDecode(np.array(img))
    return text


def test_render_is_fixed_size_png():
    png = render_qr_png("https://example.com/view/abc", width=256, margin=1)
    assert png.startswith(b"\x89PNG")
    img = Image.open(io.BytesIO(png))
    assert img.size == (256, 256)


def test_render_roundtrip():
    text = "https://example.com/view/abc"
    assert decode_qr(render_qr_png(text)) == text


def test_render_margin_is_white():
    img = Image.open(io.BytesIO(render_qr_png("hello", width=256, margin=1))).convert("L")
    # top-left pixel sits in the quiet zone
    assert img.getpixel((0, 0)) == 255


def test_render_empty_text_fails():
    with pytest.raises(QREncodeError):
        render_qr_png("")


def test_render_oversized_text_fails():
    with pytest.raises(QREncodeError):
        render_qr_png("x" * 5000)


def test_qr_endpoint_roundtrip(client):
    text = "https://example.com/view/abc"
    resp = client.get("/api/qr", params={"text": text})
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "image/png"
    assert Image.open(io.BytesIO(resp.content)).size == (256, 256)
    assert decode_qr(resp.content) == text


def test_qr_endpoint_missing_text(client):
    resp = client.get("/api/qr")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing text"}
    assert client.get("/api/qr", params={"text": ""}).status_code == 400


def test_qr_endpoint_encode_failure_is_500(client):
    resp = client.get("/api/qr", params={"text": "x" * 5000})
    assert resp.status_code == 500
    assert resp.json() == {"error": "QR generation failed"}


def test_qr_for_uploaded_view_url(client, jpeg_bytes):
    view_url = client.post(
        "/api/upload", files={"photo": ("s.jpg", jpeg_bytes, "image/jpeg")}
    ).json()["viewUrl"]
    resp = client.get("/api/qr", params={"text": view_url})
    assert decode_qr(resp.content) == view_url
