#!/usr/bin/env python3
"""
QR Selfie Production Startup Script
Starts the server on all interfaces so phones on the same network can reach it
"""

import uvicorn
from qrselfie.config import settings
from qrselfie.services.network import resolve_base_url


def start_production_server():
    """Start the production server with proper configuration"""
    print("🚀 Starting QR Selfie Production Server...")
    print(f"📷 Capture page: {resolve_base_url(settings.PUBLIC_BASE_URL, settings.PORT)}/")
    print(f"📊 API Documentation: http://localhost:{settings.PORT}/docs")
    print("=" * 60)

    # The manifest lives in process memory, so a single worker only
    uvicorn.run(
        "qrselfie.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
        workers=1,
        log_level="info",
        access_log=True
    )


if __name__ == "__main__":
    start_production_server()
