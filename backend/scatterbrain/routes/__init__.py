# Routes package init
"""
ScatterBrain Backend - API Routes Package
=========================================

Route Inventory:
    - ping.py:            GET  /api/ping
    - thoughts.py:        POST /api/thoughts
                          GET  /api/thoughts
                          GET  /api/thoughts/{id}
                          PUT  /api/thoughts/{id}
    - labels.py:          POST /api/labels
                          GET  /api/labels
    - thought_labels.py:  PUT  /api/thought-labels
                          POST /api/thought-labels
                          GET  /api/thoughts/{id}/labels

Design Principle:
    Routes are THIN. Each one decodes the request, calls exactly one
    processor operation, and returns the result with its success status.
    Failures are raised as exceptions and mapped to status codes by the
    handlers registered in main.py.
"""

from fastapi import Request

from scatterbrain.services.processor import ThoughtProcessor


def get_processor(request: Request) -> ThoughtProcessor:
    """
    FastAPI dependency returning the processor injected into this app.

    Example:
        async def handler(processor: ThoughtProcessor = Depends(get_processor)):
            ...
    """
    return request.app.state.processor
