# sitepulse/adapters/inbound/api/v1/router.py

from fastapi import APIRouter
from sitepulse.adapters.inbound.api.v1.endpoints import auth_endpoint, events_endpoint

# Public authentication routes, mounted at the root
auth_router = APIRouter()
auth_router.include_router(auth_endpoint.router, prefix="/auth", tags=["Auth"])

# Token-protected event routes, mounted under /api
api_router = APIRouter()
api_router.include_router(events_endpoint.router, tags=["Events"])
