"""
FastAPI dependencies for the request handlers.
"""

from __future__ import annotations

from fastapi import Request

from talkrag.services.container import Services


def get_services(request: Request) -> Services:
    """Collaborator handles built at startup (see main.lifespan)."""
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise RuntimeError("Services not initialized; startup did not complete.")
    return services
