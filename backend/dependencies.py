"""FastAPI dependencies for the process-scoped services built in create_app."""

from fastapi import Request

from config import Settings
from services.cache import TTLCache
from services.rapidapi import RapidAPIClient


def get_cache(request: Request) -> TTLCache:
    return request.app.state.cache


def get_rapidapi(request: Request) -> RapidAPIClient:
    return request.app.state.rapidapi


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
