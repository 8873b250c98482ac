from __future__ import annotations

from typing import Any, Mapping

from eth_account import Account
from web3 import Web3

from otim_settle.domain import Signature, SignerError


def _word(value: int) -> str:
    return f"0x{int(value):064x}"


class EthSigner:
    """secp256k1 signer backed by a raw private key.

    Instructions are signed as EIP-712 typed data; delegations as EIP-7702
    set-code authorizations.
    """

    def __init__(self, private_key: str):
        key = private_key.strip()
        if not key.startswith("0x"):
            key = "0x" + key
        try:
            self._acct = Account.from_key(key)
        except Exception as exc:
            # Never echo the key itself.
            raise SignerError(f"invalid private key: {type(exc).__name__}") from exc

    @property
    def address(self) -> str:
        return self._acct.address

    def sign_typed_data(self, typed_data: Mapping[str, Any]) -> Signature:
        try:
            signed = self._acct.sign_typed_data(full_message=dict(typed_data))
        except Exception as exc:
            raise SignerError(f"typed data signing failed: {exc}") from exc
        return Signature(v=int(signed.v), r=_word(signed.r), s=_word(signed.s))

    def sign_authorization(self, chain_id: int, delegate_address: str, nonce: int) -> Signature:
        try:
            signed = self._acct.sign_authorization(
                {
                    "chainId": int(chain_id),
                    "address": Web3.to_checksum_address(delegate_address),
                    "nonce": int(nonce),
                }
            )
        except Exception as exc:
            raise SignerError(f"authorization signing failed on chain {chain_id}: {exc}") from exc
        return Signature(v=int(signed.y_parity), r=_word(signed.r), s=_word(signed.s))
