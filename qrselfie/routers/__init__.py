from fastapi import APIRouter
import logging


def build_router() -> APIRouter:
    router = APIRouter()
    log = logging.getLogger("routers")

    from .health import router as health_router
    router.include_router(health_router)
    log.info("Loaded router: health")

    from .photos import router as photos_router
    router.include_router(photos_router)
    log.info("Loaded router: photos")

    from .qr import router as qr_router
    router.include_router(qr_router)
    log.info("Loaded router: qr")

    from .view import router as view_router
    router.include_router(view_router)
    log.info("Loaded router: view")

    return router
