"""Preflop range API endpoints.

Endpoints:
    GET    /api/ranges          - List range names
    GET    /api/ranges/{name}   - A range with its entries
    PUT    /api/ranges/{name}   - Create or replace a custom range
    DELETE /api/ranges/{name}   - Remove a custom range
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from backend.models import RangeModel
from holdem.exceptions import ConfigurationError, MalformedRangeError
from holdem.poker.strategy.ranges import RangeRegistry

logger = logging.getLogger(__name__)


def setup_router(range_registry: RangeRegistry) -> APIRouter:
    """Create the ranges router bound to ``range_registry``."""
    router = APIRouter(prefix="/api/ranges", tags=["ranges"])

    @router.get("")
    async def list_ranges():
        names = range_registry.names()
        return JSONResponse(
            {
                "ranges": [
                    {
                        "name": name,
                        "predefined": range_registry.is_predefined(name),
                        "version": range_registry.get(name).version,
                        "hand_count": len(range_registry.get(name).entries),
                    }
                    for name in names
                ],
                "count": len(names),
            }
        )

    @router.get("/{name}")
    async def get_range(name: str):
        ai_range = range_registry.get(name)
        if ai_range is None:
            return JSONResponse({"error": f"Range not found: {name}"}, status_code=404)
        data = ai_range.to_dict()
        data["predefined"] = range_registry.is_predefined(name)
        data["coverage"] = round(ai_range.coverage, 4)
        return JSONResponse(data)

    @router.put("/{name}")
    async def put_range(name: str, request: RangeModel):
        """Validate and store a custom range; re-registering bumps its version."""
        if request.name != name:
            return JSONResponse(
                {"error": f"Range name {request.name!r} does not match path {name!r}"},
                status_code=400,
            )
        try:
            stored = range_registry.register(request.to_range())
        except MalformedRangeError as e:
            logger.warning(f"Rejected range {name!r}: {e}")
            return JSONResponse({"error": str(e), "bad_entries": e.bad_entries}, status_code=400)
        except ConfigurationError as e:
            return JSONResponse({"error": str(e)}, status_code=400)
        return JSONResponse(stored.to_dict())

    @router.delete("/{name}")
    async def delete_range(name: str):
        try:
            removed = range_registry.remove(name)
        except ConfigurationError as e:
            return JSONResponse({"error": str(e)}, status_code=400)
        if not removed:
            return JSONResponse({"error": f"Range not found: {name}"}, status_code=404)
        return JSONResponse({"success": True, "name": name})

    return router
