"""JSON-RPC endpoint.

Always answers HTTP 200 with a response envelope; failures are reported
inside the envelope, never as HTTP errors.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Request

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/rpc")
async def rpc(request: Request, payload: Any = Body(...)):
    """Resolve one request envelope."""
    try:
        controller = request.app.state.get_controller()
    except RuntimeError as e:
        logger.error(f"Controller unavailable: {e}")
        request_id = payload.get("id") if isinstance(payload, dict) else None
        return {"id": request_id, "error": {"message": str(e)}}

    return await controller.resolve(payload)
