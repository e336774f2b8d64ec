from fastapi import APIRouter
from app.api.v1 import auth, eco_locations, eco_projects, health, users, websites

router = APIRouter()
router.include_router(health.router)
router.include_router(auth.router)
router.include_router(users.router)
router.include_router(websites.router)
router.include_router(eco_locations.router)
router.include_router(eco_projects.router)
