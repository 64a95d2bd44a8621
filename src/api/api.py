from api.endpoints import photo_info
from fastapi import APIRouter

api_router = APIRouter()
api_router.include_router(photo_info.router, prefix="/photo-info", tags=["Photo Info"])
