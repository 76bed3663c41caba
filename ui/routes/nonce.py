"""Nonce issuing routes."""

from fastapi import APIRouter, Depends, HTTPException, Query

from core.errors import InvalidLength
from internal.logging import get_logger
from ui.auth import verify_basic_auth
from utils.timestamp import format_instant, format_timestamp

router = APIRouter(prefix="/api/v1", tags=["nonce"])

# These will be set by app.py
_generator = None
_config = None


def init(generator, nonce_config):
    """Initialize with generator and nonce config references."""
    global _generator, _config
    _generator = generator
    _config = nonce_config


def _check_bounds(length):
    if length is not None and length > _config.max_length:
        raise HTTPException(status_code=422, detail=f"length must be <= {_config.max_length}")


def _issue(count, length):
    try:
        return _generator.generate_many(count, length)
    except InvalidLength as exc:
        get_logger().debug("rejected length", length=exc.length, error_id=exc.error_id)
        raise HTTPException(status_code=400, detail=exc.to_dict()) from exc


@router.get("/nonce")
async def nonce(length: int | None = Query(default=None, ge=0)):
    """Issue one nonce. Length defaults to the configured default."""
    _check_bounds(length)
    value = _issue(1, length)[0]
    return {"nonce": value, "length": len(value)}


@router.get("/nonces")
async def nonces(count: int = Query(default=1, ge=1), length: int | None = Query(default=None, ge=0)):
    """Issue a batch of nonces, in issue order."""
    if count > _config.max_batch:
        raise HTTPException(status_code=422, detail=f"count must be <= {_config.max_batch}")
    _check_bounds(length)
    return {"nonces": _issue(count, length)}


@router.get("/stats")
async def stats(username=Depends(verify_basic_auth)):
    """Return generator statistics (requires basic auth)."""
    generator_stats = _generator.get_stats()
    last = _generator.clock.last
    generator_stats["last_issued"] = format_instant(last) if last else None
    return {"timestamp": format_timestamp(), "generator": generator_stats}
