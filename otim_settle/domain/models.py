from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


def _hex_quantity(value: int) -> str:
    return hex(int(value))


def _int_quantity(raw: Any) -> int:
    if isinstance(raw, str):
        return int(raw, 16) if raw.lower().startswith("0x") else int(raw)
    return int(raw)


@dataclass(frozen=True)
class SettlementRequest:
    """Accepted source tokens per chain converging to one destination token."""

    accepted_tokens: Mapping[int, tuple[str, ...]]
    settlement_chain: int
    settlement_token: str
    settlement_amount: int
    recipient_address: str
    note: str = ""
    max_runs: int = 1

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "acceptedTokens": {
                str(chain_id): list(tokens) for chain_id, tokens in self.accepted_tokens.items()
            },
            "settlementChain": int(self.settlement_chain),
            "settlementToken": self.settlement_token,
            "settlementAmount": _hex_quantity(self.settlement_amount),
            "recipientAddress": self.recipient_address,
            "maxRuns": int(self.max_runs),
        }
        if self.note:
            payload["note"] = self.note
        return payload


@dataclass(frozen=True)
class Signature:
    v: int
    r: str
    s: str

    def to_payload(self) -> dict[str, Any]:
        return {"v": self.v, "r": self.r, "s": self.s}


@dataclass(frozen=True)
class Instruction:
    chain_id: int
    salt: int
    max_executions: int
    action: str
    arguments: str
    typed_data: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, raw: Mapping[str, Any]) -> "Instruction":
        return cls(
            chain_id=_int_quantity(raw["chainId"]),
            salt=_int_quantity(raw.get("salt", 0)),
            max_executions=_int_quantity(raw.get("maxExecutions", 0)),
            action=str(raw["action"]),
            arguments=str(raw.get("arguments", "0x")),
            typed_data=dict(raw["typedData"]),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "chainId": self.chain_id,
            "salt": self.salt,
            "maxExecutions": self.max_executions,
            "action": self.action,
            "arguments": self.arguments,
        }


@dataclass(frozen=True)
class Authorization:
    """EIP-7702 delegation the service asks the signer to grant on one chain."""

    chain_id: int
    delegate_address: str
    nonce: int

    @classmethod
    def from_payload(cls, raw: Mapping[str, Any]) -> "Authorization":
        return cls(
            chain_id=_int_quantity(raw["chainId"]),
            delegate_address=str(raw["address"]),
            nonce=_int_quantity(raw.get("nonce", 0)),
        )

    def to_payload(self) -> dict[str, Any]:
        return {"chainId": self.chain_id, "address": self.delegate_address, "nonce": self.nonce}


@dataclass(frozen=True)
class BuildResponse:
    request_id: str
    ephemeral_wallet_address: str
    instructions: tuple[Instruction, ...] = ()
    completion_instructions: tuple[Instruction, ...] = ()
    authorizations: tuple[Authorization, ...] = ()

    @classmethod
    def from_payload(cls, raw: Mapping[str, Any]) -> "BuildResponse":
        request_id = str(raw["requestId"] or "")
        if not request_id:
            raise ValueError("build response has an empty requestId")
        return cls(
            request_id=request_id,
            ephemeral_wallet_address=str(raw["ephemeralWalletAddress"]),
            instructions=tuple(Instruction.from_payload(i) for i in raw.get("instructions") or []),
            completion_instructions=tuple(
                Instruction.from_payload(i) for i in raw.get("completionInstructions") or []
            ),
            authorizations=tuple(
                Authorization.from_payload(a) for a in raw.get("authorizations") or []
            ),
        )


@dataclass(frozen=True)
class SignedInstruction:
    instruction: Instruction
    signature: Signature

    def to_payload(self) -> dict[str, Any]:
        return {**self.instruction.to_payload(), "signature": self.signature.to_payload()}


@dataclass(frozen=True)
class SignedAuthorization:
    authorization: Authorization
    signature: Signature

    def to_payload(self) -> dict[str, Any]:
        return {**self.authorization.to_payload(), "signature": self.signature.to_payload()}


@dataclass(frozen=True)
class SignedOrchestration:
    request_id: str
    instructions: tuple[SignedInstruction, ...]
    completion_instructions: tuple[SignedInstruction, ...]
    authorizations: tuple[SignedAuthorization, ...] = ()

    @property
    def signed_count(self) -> int:
        return len(self.instructions) + len(self.completion_instructions)

    def to_payload(self) -> dict[str, Any]:
        return {
            "requestId": self.request_id,
            "instructions": [i.to_payload() for i in self.instructions],
            "completionInstructions": [i.to_payload() for i in self.completion_instructions],
            "authorizations": [a.to_payload() for a in self.authorizations],
        }
