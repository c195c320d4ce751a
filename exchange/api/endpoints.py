"""API endpoints for the exchange service.

Handlers are async so that every engine call runs on the event loop thread;
operations are therefore serialized without extra locking.
"""

import structlog
from fastapi import APIRouter, Depends, Query

from exchange.api.schemas import (
    AssetSwapRequest,
    BalancesResponse,
    DepositRequest,
    DepositResponse,
    FeeResponse,
    FundRequest,
    ListAssetRequest,
    PoolResponse,
    QuoteResponse,
    SetFeeRequest,
    ShareBalanceResponse,
    SwapRequest,
    SwapResponse,
    WithdrawRequest,
    WithdrawResponse,
)
from exchange.errors import PoolNotFound
from exchange.models.events import ExchangeEvent
from exchange.models.types import normalize_handle
from exchange.sandbox import Sandbox, get_default_sandbox

logger = structlog.get_logger()

router = APIRouter()


def get_sandbox() -> Sandbox:
    """Dependency provider for the sandbox instance.

    Override this in tests to inject a fresh sandbox:
        app.dependency_overrides[get_sandbox] = lambda: sandbox

    Returns:
        The sandbox whose exchange serves requests.
    """
    return get_default_sandbox()


# --- Pools ---


@router.get("/pools")
async def list_pools(sandbox: Sandbox = Depends(get_sandbox)) -> list[PoolResponse]:
    return [PoolResponse.from_pool(pool) for pool in sandbox.exchange.pools()]


@router.get("/pools/{asset}")
async def get_pool(asset: str, sandbox: Sandbox = Depends(get_sandbox)) -> PoolResponse:
    pool = sandbox.exchange.get_pool(asset)
    if pool is None or not pool.is_active:
        raise PoolNotFound(f"No active pool for asset {asset}")
    return PoolResponse.from_pool(pool)


@router.get("/pools/{asset}/shares/{provider}")
async def get_share_balance(
    asset: str,
    provider: str,
    sandbox: Sandbox = Depends(get_sandbox),
) -> ShareBalanceResponse:
    exchange = sandbox.exchange
    return ShareBalanceResponse(
        asset=normalize_handle(asset),
        provider=provider,
        shares=exchange.share_balance_of(asset, provider),
        share_supply=exchange.total_shares(asset),
    )


# --- Quotes ---


@router.get("/quote/base-to-asset")
async def quote_base_to_asset(
    asset: str,
    amount_in: int = Query(ge=0),
    sandbox: Sandbox = Depends(get_sandbox),
) -> QuoteResponse:
    exchange = sandbox.exchange
    amount_out = exchange.quote_base_to_asset(asset, amount_in)
    return QuoteResponse(amount_in=amount_in, amount_out=amount_out, fee=exchange.fee)


@router.get("/quote/asset-to-base")
async def quote_asset_to_base(
    asset: str,
    amount_in: int = Query(ge=0),
    sandbox: Sandbox = Depends(get_sandbox),
) -> QuoteResponse:
    exchange = sandbox.exchange
    amount_out = exchange.quote_asset_to_base(asset, amount_in)
    return QuoteResponse(amount_in=amount_in, amount_out=amount_out, fee=exchange.fee)


@router.get("/quote/asset-to-asset")
async def quote_asset_to_asset(
    asset_in: str,
    asset_out: str,
    amount_in: int = Query(ge=0),
    sandbox: Sandbox = Depends(get_sandbox),
) -> QuoteResponse:
    exchange = sandbox.exchange
    amount_out = exchange.quote_asset_to_asset(asset_in, asset_out, amount_in)
    return QuoteResponse(amount_in=amount_in, amount_out=amount_out, fee=exchange.fee)


# --- Liquidity ---


@router.post("/liquidity/deposit")
async def deposit(request: DepositRequest, sandbox: Sandbox = Depends(get_sandbox)) -> DepositResponse:
    shares = sandbox.exchange.deposit(
        request.asset,
        int(request.base_amount),
        int(request.asset_amount),
        request.caller,
    )
    return DepositResponse(shares=shares)


@router.post("/liquidity/withdraw")
async def withdraw(request: WithdrawRequest, sandbox: Sandbox = Depends(get_sandbox)) -> WithdrawResponse:
    base_amount, asset_amount = sandbox.exchange.withdraw(request.asset, int(request.shares), request.caller)
    return WithdrawResponse(base_amount=base_amount, asset_amount=asset_amount)


# --- Swaps ---


@router.post("/swap/base-to-asset")
async def swap_base_to_asset(request: SwapRequest, sandbox: Sandbox = Depends(get_sandbox)) -> SwapResponse:
    amount_out = sandbox.exchange.swap_base_to_asset(
        request.asset, int(request.amount_in), int(request.min_out), request.caller
    )
    return SwapResponse(amount_out=amount_out)


@router.post("/swap/asset-to-base")
async def swap_asset_to_base(request: SwapRequest, sandbox: Sandbox = Depends(get_sandbox)) -> SwapResponse:
    amount_out = sandbox.exchange.swap_asset_to_base(
        request.asset, int(request.amount_in), int(request.min_out), request.caller
    )
    return SwapResponse(amount_out=amount_out)


@router.post("/swap/asset-to-asset")
async def swap_asset_to_asset(
    request: AssetSwapRequest,
    sandbox: Sandbox = Depends(get_sandbox),
) -> SwapResponse:
    amount_out = sandbox.exchange.swap_asset_to_asset(
        request.asset_in,
        request.asset_out,
        int(request.amount_in),
        int(request.min_out),
        request.caller,
    )
    return SwapResponse(amount_out=amount_out)


# --- Fee ---


@router.get("/fee")
async def get_fee(sandbox: Sandbox = Depends(get_sandbox)) -> FeeResponse:
    return FeeResponse(fee=sandbox.exchange.fee)


@router.put("/fee")
async def set_fee(request: SetFeeRequest, sandbox: Sandbox = Depends(get_sandbox)) -> FeeResponse:
    sandbox.exchange.set_fee(request.fee, request.caller)
    return FeeResponse(fee=sandbox.exchange.fee)


# --- Events ---


@router.get("/events")
async def list_events(
    since: int = Query(default=0, ge=0),
    sandbox: Sandbox = Depends(get_sandbox),
) -> list[ExchangeEvent]:
    return sandbox.exchange.events.since(since)


# --- Sandbox administration ---


@router.post("/sandbox/assets", status_code=201)
async def list_asset(request: ListAssetRequest, sandbox: Sandbox = Depends(get_sandbox)) -> dict[str, str]:
    ledger = sandbox.list_asset(request.asset, transfer_tax=request.transfer_tax)
    return {"asset": ledger.address}


@router.post("/sandbox/fund")
async def fund(request: FundRequest, sandbox: Sandbox = Depends(get_sandbox)) -> BalancesResponse:
    sandbox.fund(
        request.holder,
        base_amount=int(request.base_amount),
        asset=request.asset,
        asset_amount=int(request.asset_amount),
    )
    logger.info("sandbox_funded", holder=request.holder, asset=request.asset)
    return BalancesResponse(holder=request.holder, balances=sandbox.balances(request.holder))


@router.get("/sandbox/balances/{holder}")
async def get_balances(holder: str, sandbox: Sandbox = Depends(get_sandbox)) -> BalancesResponse:
    return BalancesResponse(holder=holder, balances=sandbox.balances(holder))
