"""QR Selfie: upload a photo, get a shareable link and QR code."""

__version__ = "1.0.0"
