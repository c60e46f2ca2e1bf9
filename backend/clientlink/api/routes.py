"""REST API routes for the clientlink backend.

All endpoints are under /api/v1. Routes receive dependencies (repos,
matcher config) via app.state. The matcher only proposes; a link is written
by POST /matches/apply after a human confirmed the proposal.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from clientlink.db.models import Client, Target
from clientlink.db.repositories import to_source_record
from clientlink.entity.matcher import propose_matches
from clientlink.entity.models import CONFIDENCE_ORDER
from clientlink.security import sanitize_match_log

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1")

NOTHING_TO_LINK = "No unlinked clients or no target records to link against"


# -- Request/Response models --------------------------------------------------

class CreateClientRequest(BaseModel):
    name: str
    id: str | None = None


class CreateTargetRequest(BaseModel):
    name: str
    tax_id: str | None = None
    id: str | None = None


class ApplyMatchRequest(BaseModel):
    client_id: str
    target_key: str


# -- Helper to get state from app ---------------------------------------------

def _get_state(request: Request) -> Any:
    """Get app state (repos, settings, etc.)."""
    return request.app.state


# -- Record endpoints ---------------------------------------------------------

@router.post("/clients", response_model=Client)
async def create_client(body: CreateClientRequest, request: Request) -> dict[str, Any]:
    """Create a client record (set A)."""
    state = _get_state(request)
    return state.client_repo.create(name=body.name, client_id=body.id)


@router.get("/clients/unlinked", response_model=list[Client])
async def list_unlinked_clients(request: Request) -> list[dict[str, Any]]:
    """List clients that still need a link."""
    state = _get_state(request)
    return state.client_repo.list_unlinked()


@router.post("/targets", response_model=Target)
async def create_target(body: CreateTargetRequest, request: Request) -> dict[str, Any]:
    """Create a link target record (set B)."""
    state = _get_state(request)
    return state.target_repo.create(name=body.name, tax_id=body.tax_id, target_id=body.id)


# -- Matching endpoints -------------------------------------------------------

@router.post("/matches/propose")
async def propose(request: Request) -> dict[str, Any]:
    """Propose links for every unlinked client, highest confidence first."""
    state = _get_state(request)
    clients = state.client_repo.list_unlinked()
    targets = state.target_repo.list_named()

    if not clients or not targets:
        return {"matches": [], "total": 0, "message": NOTHING_TO_LINK}

    set_a = [to_source_record(row) for row in clients]
    set_b = [to_source_record(row, metadata_fields=("tax_id",)) for row in targets]

    started = time.perf_counter()
    # CPU-bound O(|A| * |B|) scan; keep it off the event loop
    candidates = await run_in_threadpool(propose_matches, set_a, set_b, state.matcher_config)
    duration_ms = (time.perf_counter() - started) * 1000

    tier_counts = {tier: 0 for tier in CONFIDENCE_ORDER}
    for candidate in candidates:
        tier_counts[candidate.confidence] += 1
    logger.info(sanitize_match_log(len(set_a), len(set_b), tier_counts, duration_ms))

    return {
        "matches": [candidate.to_dict() for candidate in candidates],
        "total": len(candidates),
    }


@router.post("/matches/apply")
async def apply_match(body: ApplyMatchRequest, request: Request) -> dict[str, Any]:
    """Persist a human-confirmed link between a client and a target key."""
    state = _get_state(request)

    target_key = body.target_key.strip()
    if not body.client_id.strip() or not target_key:
        raise HTTPException(status_code=400, detail="client_id and target_key are required")

    updated = state.client_repo.apply_link(body.client_id, target_key)
    if updated is None:
        raise HTTPException(status_code=404, detail="Client not found")

    return {"success": True, "client": Client(**updated).model_dump(mode="json")}
