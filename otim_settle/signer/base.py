from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from otim_settle.domain import Signature


@runtime_checkable
class Signer(Protocol):
    """Anything able to authorize and sign orchestration instructions."""

    @property
    def address(self) -> str: ...

    def sign_typed_data(self, typed_data: Mapping[str, Any]) -> Signature: ...

    def sign_authorization(self, chain_id: int, delegate_address: str, nonce: int) -> Signature: ...
