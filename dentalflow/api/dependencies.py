"""
Dependencies de FastAPI.
"""

from fastapi import Request

from dentalflow.store import RecordStore


def get_store(request: Request) -> RecordStore:
    """El store se crea en el lifespan y vive en app.state."""
    return request.app.state.store
