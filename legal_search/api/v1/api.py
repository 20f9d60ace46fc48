# legal_search/api/v1/api.py
from fastapi import APIRouter
from legal_search.api.v1.endpoints import search
from legal_search.api.v1.endpoints import sections

# This is the main router for the v1 API
api_router = APIRouter()

api_router.include_router(search.router, prefix="/search", tags=["search"])
api_router.include_router(sections.router, prefix="/sections", tags=["sections"])
