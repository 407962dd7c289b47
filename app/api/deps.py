"""
Route dependencies.

The container is built once in the startup event; tests override
get_container through app.dependency_overrides.
"""

from fastapi import Request

from app.services.container import ServiceContainer


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container
