from fastapi import APIRouter
from lingosync.api import history
from lingosync.api import translation

router = APIRouter()


@router.get("/health")
async def health():
    return {"status": "ok"}


# Include translation and history routers
router.include_router(translation.router)
router.include_router(history.router)
