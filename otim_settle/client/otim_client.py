from __future__ import annotations

from typing import Any, Protocol

import requests

from otim_settle.client.http_service import HttpService
from otim_settle.domain import (
    BuildResponse,
    ClientError,
    SettlementRequest,
    SignedAuthorization,
    SignedInstruction,
    SignedOrchestration,
)
from otim_settle.signer import Signer

BUILD_SETTLEMENT_PATH = "orchestration/build/settlement"
NEW_ORCHESTRATION_PATH = "orchestration/new"
DETAILS_PATH = "orchestration/{request_id}"


class OrchestrationClient(Protocol):
    def build_settlement_orchestration(self, request: SettlementRequest) -> BuildResponse: ...

    def new_orchestration_from_build(self, build: BuildResponse) -> SignedOrchestration: ...

    def new_orchestration(self, signed: SignedOrchestration) -> None: ...


def _unwrap(body: Any) -> Any:
    if isinstance(body, dict) and isinstance(body.get("data"), dict):
        return body["data"]
    return body


class OtimClient:
    """Otim orchestration API client. Signing happens locally with the given signer."""

    def __init__(
        self,
        signer: Signer,
        api_url: str,
        api_key: str,
        *,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ):
        if signer is None:
            raise ClientError("signer is required")
        self.signer = signer
        self.http = HttpService(api_url, api_key=api_key, timeout=timeout, session=session)

    def close(self) -> None:
        self.http.close()

    def build_settlement_orchestration(self, request: SettlementRequest) -> BuildResponse:
        body = _unwrap(self.http.request_json("POST", BUILD_SETTLEMENT_PATH, payload=request.to_payload()))
        if not isinstance(body, dict):
            raise ClientError("build response is not a JSON object")
        try:
            return BuildResponse.from_payload(body)
        except (KeyError, TypeError, ValueError) as e:
            raise ClientError(f"malformed build response: {e!r}") from e

    def new_orchestration_from_build(self, build: BuildResponse) -> SignedOrchestration:
        instructions = tuple(
            SignedInstruction(i, self.signer.sign_typed_data(i.typed_data)) for i in build.instructions
        )
        completion = tuple(
            SignedInstruction(i, self.signer.sign_typed_data(i.typed_data))
            for i in build.completion_instructions
        )
        authorizations = tuple(
            SignedAuthorization(a, self.signer.sign_authorization(a.chain_id, a.delegate_address, a.nonce))
            for a in build.authorizations
        )
        return SignedOrchestration(
            request_id=build.request_id,
            instructions=instructions,
            completion_instructions=completion,
            authorizations=authorizations,
        )

    def new_orchestration(self, signed: SignedOrchestration) -> None:
        self.http.request_json("POST", NEW_ORCHESTRATION_PATH, payload=signed.to_payload())

    def get_orchestration_details(self, request_id: str) -> dict[str, Any]:
        if not str(request_id or "").strip():
            raise ClientError("request id is required")
        body = _unwrap(self.http.request_json("GET", DETAILS_PATH.format(request_id=request_id.strip())))
        if not isinstance(body, dict):
            raise ClientError("details response is not a JSON object")
        return body
