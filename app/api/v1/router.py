"""API v1 router aggregation."""
from __future__ import annotations

from fastapi import APIRouter

from app.api.v1.endpoints import crawl, geo, health, progress, scoring

router = APIRouter()

router.include_router(scoring.router)
router.include_router(crawl.router)
router.include_router(geo.router)
router.include_router(progress.router)
router.include_router(health.router)
