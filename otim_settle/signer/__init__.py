from .base import Signer
from .eth_signer import EthSigner

__all__ = ["EthSigner", "Signer"]
