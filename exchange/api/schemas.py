"""Request and response models for the exchange HTTP API.

Amounts travel as decimal strings so that uint256 values survive JSON
clients that parse numbers as doubles.
"""

from pydantic import BaseModel, Field

from exchange.models.types import Handle, Uint256
from exchange.pools.types import Pool


class PoolResponse(BaseModel):
    asset: str
    base_reserve: Uint256
    asset_reserve: Uint256
    share_supply: Uint256

    @classmethod
    def from_pool(cls, pool: Pool) -> "PoolResponse":
        return cls(
            asset=pool.asset,
            base_reserve=pool.base_reserve,
            asset_reserve=pool.asset_reserve,
            share_supply=pool.share_supply,
        )


class ShareBalanceResponse(BaseModel):
    asset: str
    provider: str
    shares: Uint256
    share_supply: Uint256


class DepositRequest(BaseModel):
    caller: Handle
    asset: Handle
    base_amount: Uint256
    asset_amount: Uint256


class DepositResponse(BaseModel):
    shares: Uint256


class WithdrawRequest(BaseModel):
    caller: Handle
    asset: Handle
    shares: Uint256


class WithdrawResponse(BaseModel):
    base_amount: Uint256
    asset_amount: Uint256


class SwapRequest(BaseModel):
    caller: Handle
    asset: Handle
    amount_in: Uint256
    min_out: Uint256 = "0"


class AssetSwapRequest(BaseModel):
    caller: Handle
    asset_in: Handle
    asset_out: Handle
    amount_in: Uint256
    min_out: Uint256 = "0"


class SwapResponse(BaseModel):
    amount_out: Uint256


class QuoteResponse(BaseModel):
    amount_in: Uint256
    amount_out: Uint256
    fee: int


class FeeResponse(BaseModel):
    fee: int = Field(description="Fee in parts-per-thousand of the input amount.")


class SetFeeRequest(BaseModel):
    caller: Handle
    fee: int


class ErrorResponse(BaseModel):
    error: str = Field(description="Stable reason code, e.g. InsufficientOutputAmount.")
    kind: str
    detail: str


class ListAssetRequest(BaseModel):
    asset: Handle
    transfer_tax: int = Field(default=0, ge=0, le=1000)


class FundRequest(BaseModel):
    holder: Handle
    base_amount: Uint256 = "0"
    asset: Handle | None = None
    asset_amount: Uint256 = "0"


class BalancesResponse(BaseModel):
    holder: str
    balances: dict[str, Uint256]
