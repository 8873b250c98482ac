from __future__ import annotations

from decimal import Decimal

from web3 import Web3

from otim_settle.domain import SettlementRequest

# ── CHAINS ────────────────────────────────────────────────────────────────────
ETHEREUM_MAINNET_CHAIN_ID = 1
BASE_CHAIN_ID = 8453

# ── TOKENS ────────────────────────────────────────────────────────────────────
PYUSD_ETHEREUM = Web3.to_checksum_address("0x6c3ea9036406852006290770BEdFcAbA0e23A0e8")
USDC_BASE = Web3.to_checksum_address("0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913")

USDC_DECIMALS = 6
DEFAULT_SETTLEMENT_AMOUNT = 1_000_000  # 1.0 USDC at 6 decimals


def from_base_units(units: int, decimals: int = USDC_DECIMALS) -> Decimal:
    return Decimal(int(units)).scaleb(-decimals)


def build_settlement_request(
    recipient_address: str,
    *,
    amount: int = DEFAULT_SETTLEMENT_AMOUNT,
    note: str = "",
    max_runs: int = 1,
) -> SettlementRequest:
    """pyUSD on Ethereum or USDC on Base in, USDC on Base out."""
    if int(amount) <= 0:
        raise ValueError(f"settlement amount must be positive, got {amount}")
    return SettlementRequest(
        accepted_tokens={
            ETHEREUM_MAINNET_CHAIN_ID: (PYUSD_ETHEREUM,),
            BASE_CHAIN_ID: (USDC_BASE,),
        },
        settlement_chain=BASE_CHAIN_ID,
        settlement_token=USDC_BASE,
        settlement_amount=int(amount),
        recipient_address=Web3.to_checksum_address(recipient_address),
        note=note,
        max_runs=max_runs,
    )
