"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from jobportal.api.routes.user_routes import router as user_router
from jobportal.api.routes.application_routes import router as application_router
from jobportal.api.routes.job_routes import router as job_router

# Main API router
api_router = APIRouter()

# Include all sub-routers (applications before jobs: /jobs/withdraw vs /jobs/{job_id})
api_router.include_router(user_router)
api_router.include_router(application_router)
api_router.include_router(job_router)
