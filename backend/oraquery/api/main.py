from fastapi import APIRouter

from oraquery.api.routes import query, utils

api_router = APIRouter()
api_router.include_router(utils.router)
api_router.include_router(query.router)
