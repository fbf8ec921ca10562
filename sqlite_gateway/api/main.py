from fastapi import APIRouter

from sqlite_gateway.api.routes import execute, utils

api_router = APIRouter()
api_router.include_router(execute.router)
api_router.include_router(utils.router)
