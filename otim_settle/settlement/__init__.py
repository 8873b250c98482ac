from .plan import (
    BASE_CHAIN_ID,
    ETHEREUM_MAINNET_CHAIN_ID,
    DEFAULT_SETTLEMENT_AMOUNT,
    PYUSD_ETHEREUM,
    USDC_BASE,
    build_settlement_request,
    from_base_units,
)

__all__ = [
    "BASE_CHAIN_ID",
    "DEFAULT_SETTLEMENT_AMOUNT",
    "ETHEREUM_MAINNET_CHAIN_ID",
    "PYUSD_ETHEREUM",
    "USDC_BASE",
    "build_settlement_request",
    "from_base_units",
]
