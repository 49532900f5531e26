"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from noticeboard.api.v1.dependencies.
"""

from fastapi import APIRouter

from noticeboard.api.v1.endpoints import announcements, health, jobs, roles, users

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(roles.router, prefix="/roles", tags=["roles"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(
    announcements.router, prefix="/announcements", tags=["announcements"]
)
api_router.include_router(jobs.router, prefix="/jobs", tags=["jobs"])
