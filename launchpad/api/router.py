from fastapi import APIRouter

from launchpad.api.routes.events import router as events_router
from launchpad.api.routes.signups import router as signups_router

router = APIRouter()
router.include_router(events_router)
router.include_router(signups_router)
