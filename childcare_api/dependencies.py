from fastapi import Request

from .services.registry import ServiceRegistry


def get_services(request: Request) -> ServiceRegistry:
    """FastAPI dependency returning the application's service registry."""
    return request.app.state.services
