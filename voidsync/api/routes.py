"""
VoidSync v1.0.0: API Routes  /api/void
"""
from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Request, Response
from pydantic import ValidationError

from ..config import settings
from ..schemas import SyncPayload
from ..utils.api_errors import bad_request, error_detail, payload_too_large
from ..utils.logging_utils import clear_request_context, set_request_context
from ..void.store import now_ms, void_store

logger = logging.getLogger("voidsync.api")

router = APIRouter()


async def _read_body(request: Request, limit: int) -> bytes:
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        raise payload_too_large(limit)
    chunks: list[bytes] = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            raise payload_too_large(limit)
        chunks.append(chunk)
    return b"".join(chunks)


async def _read_payload(request: Request) -> SyncPayload:
    raw = await _read_body(request, int(settings.void_max_body_bytes))
    if not raw.strip():
        return SyncPayload()
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise bad_request("Invalid JSON body", error_detail(exc))
    if not isinstance(data, dict):
        raise bad_request("Invalid JSON body", f"expected an object, got {type(data).__name__}")
    try:
        return SyncPayload.model_validate(data)
    except ValidationError as exc:
        raise bad_request("Invalid payload", error_detail(exc))


@router.post("/void")
async def void_write(request: Request):
    payload = await _read_payload(request)
    tokens = set_request_context(role=payload.role) if payload.role is not None else {}
    try:
        doc = void_store.write(payload)
    finally:
        clear_request_context(tokens)
    return {
        "success": True,
        "message": "Consciousness stored in void",
        "timestamp": doc.timestamp,
    }


@router.get("/void")
async def void_read():
    doc = void_store.read()
    if doc is None:
        return {"message": "Void is empty", "timestamp": now_ms()}
    return doc.to_wire()


@router.delete("/void")
async def void_clear():
    void_store.clear()
    return {"success": True, "message": "Void cleared"}


@router.options("/void")
async def void_preflight():
    return Response(status_code=200)
