"""API endpoints for the swap planner."""

from __future__ import annotations

import importlib
import os

import structlog
from fastapi import APIRouter, Depends, HTTPException

from planner.api.schemas import SwapPlanResponse, SwapRequest
from planner.config import PlannerConfig
from planner.errors import (
    InvalidIntentError,
    LedgerFetchError,
    MintResolutionError,
    MissingAuthorityError,
    PoolNotFoundError,
)
from planner.models.types import to_pubkey
from planner.swap.planner import SwapPlanner

logger = structlog.get_logger()

router = APIRouter()

_planner: SwapPlanner | None = None


def configure_planner(planner: SwapPlanner | None) -> None:
    """Install the planner used by the API (None uninstalls it)."""
    global _planner
    _planner = planner


def load_object(path: str) -> object:
    """Import ``module:attr`` (or ``module.attr``) and return the attribute."""
    module_name, sep, attr = path.partition(":")
    if not sep:
        module_name, _, attr = path.rpartition(".")
    if not module_name or not attr:
        raise ValueError(f"Expected a dotted path like 'package.module:Name', got {path!r}")
    return getattr(importlib.import_module(module_name), attr)


def load_planner_from_env(config: PlannerConfig | None = None) -> SwapPlanner | None:
    """Build the planner from the host's codec and quoter named in the environment.

    - PLANNER_CODEC: dotted path to an AccountCodec class (or factory)
    - PLANNER_QUOTER: dotted path to a SwapQuoter class (or factory)

    Both are called without arguments. Returns None when either is unset.
    """
    codec_path = os.environ.get("PLANNER_CODEC")
    quoter_path = os.environ.get("PLANNER_QUOTER")
    if not codec_path or not quoter_path:
        return None

    codec = load_object(codec_path)()  # type: ignore[operator]
    quoter = load_object(quoter_path)()  # type: ignore[operator]
    config = config or PlannerConfig.from_env()
    logger.info(
        "planner_loaded",
        codec=codec_path,
        quoter=quoter_path,
        rpc_url=config.rpc_url,
    )
    return SwapPlanner.from_config(codec, quoter, config)  # type: ignore[arg-type]


def get_planner() -> SwapPlanner:
    """Dependency provider for the planner instance.

    Override this in tests to inject a planner wired to fakes:
        app.dependency_overrides[get_planner] = lambda: planner

    Raises:
        HTTPException: 503 if the host has not configured a planner
    """
    if _planner is None:
        raise HTTPException(status_code=503, detail="Swap planner not configured")
    return _planner


@router.post("/swap/{pool_address}", response_model_exclude_none=True)
async def plan_swap(
    pool_address: str,
    request: SwapRequest,
    planner: SwapPlanner = Depends(get_planner),
) -> SwapPlanResponse:
    """Plan a swap against a pool.

    Error Handling:
        - Invalid body or intent: 422
        - Pool or mint not found: 404
        - Missing authority: 400
        - Ledger fetch failure: 502 (safe to retry)
    """
    try:
        pool = to_pubkey(pool_address)
    except ValueError as err:
        raise HTTPException(status_code=422, detail=f"Invalid pool address: {pool_address}") from err

    logger.info(
        "received_swap_request",
        pool=pool_address,
        mode=request.mode.value,
        amount=request.amount,
        mint=request.mint,
    )

    try:
        plan = await planner.swap_instructions(
            request.to_intent(),
            pool,
            slippage_tolerance_bps=request.slippage_tolerance_bps,
            authority=to_pubkey(request.authority) if request.authority else None,
        )
    except InvalidIntentError as err:
        raise HTTPException(status_code=422, detail=str(err)) from err
    except MissingAuthorityError as err:
        raise HTTPException(status_code=400, detail=str(err)) from err
    except (PoolNotFoundError, MintResolutionError) as err:
        raise HTTPException(status_code=404, detail=str(err)) from err
    except LedgerFetchError as err:
        logger.warning("swap_request_fetch_failed", pool=pool_address, error=str(err))
        raise HTTPException(status_code=502, detail=str(err)) from err

    return SwapPlanResponse.from_plan(plan)
