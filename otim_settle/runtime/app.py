from __future__ import annotations

import logging
from typing import Any, Callable

from otim_settle.client import OrchestrationClient, OtimClient
from otim_settle.config import Settings
from otim_settle.domain import StageError
from otim_settle.infra import EventSink, NullEventLogger, RuntimeEventLogger, get_logger
from otim_settle.settlement import build_settlement_request, from_base_units
from otim_settle.signer import EthSigner, Signer

SignerFactory = Callable[[str], Signer]
ClientFactory = Callable[[Signer, Settings], OrchestrationClient]


def default_client_factory(signer: Signer, settings: Settings) -> OtimClient:
    return OtimClient(signer, settings.api_url, settings.api_key, timeout=settings.http_timeout)


class SettlementApp:
    """One settlement run: signer -> client -> request -> build -> sign -> submit."""

    def __init__(
        self,
        settings: Settings,
        *,
        log: logging.Logger | None = None,
        signer_factory: SignerFactory = EthSigner,
        client_factory: ClientFactory = default_client_factory,
        events: EventSink | None = None,
    ):
        self.settings = settings
        self.log = log or get_logger("otim-settle", settings.log_level)
        self._signer_factory = signer_factory
        self._client_factory = client_factory
        if events is None:
            events = RuntimeEventLogger(settings.events_dir) if settings.events_dir else NullEventLogger()
        self.events = events

    def _emit(self, event: str, **fields: Any) -> None:
        # The event log never decides the outcome of a run.
        try:
            self.events.emit(event, **fields)
        except OSError as exc:
            self.log.warning("event log write failed for %s: %s", event, exc)

    def _stage(self, stage: str, fn: Callable[..., Any], *args: Any) -> Any:
        try:
            return fn(*args)
        except Exception as exc:
            self._emit("failed", stage=stage, error=str(exc))
            raise StageError(stage, exc) from exc

    def run(self) -> str:
        s = self.settings

        self.log.info("Initializing signer...")
        signer = self._stage("signer", self._signer_factory, s.private_key)
        self.log.info("Signer address: %s", signer.address)

        self.log.info("Creating Otim client for %s...", s.api_url)
        client = self._stage("client", self._client_factory, signer, s)
        try:
            return self._settle(client)
        finally:
            close = getattr(client, "close", None)
            if callable(close):
                close()

    def _settle(self, client: OrchestrationClient) -> str:
        s = self.settings

        self.log.info("Building settlement orchestration request...")
        request = self._stage(
            "request",
            lambda: build_settlement_request(
                s.recipient_address, amount=s.settlement_amount, note=s.note
            ),
        )
        self.log.info(
            "Settling %s USDC on chain %s to %s",
            from_base_units(request.settlement_amount),
            request.settlement_chain,
            request.recipient_address,
        )

        self.log.info("Calling BuildSettlementOrchestration API...")
        build = self._stage("build", client.build_settlement_orchestration, request)
        self.log.info("Build response - RequestID: %s", build.request_id)
        self.log.info("Build response - Ephemeral wallet: %s", build.ephemeral_wallet_address)
        self._emit(
            "build_ok",
            request_id=build.request_id,
            ephemeral_wallet=build.ephemeral_wallet_address,
        )

        self.log.info("Signing orchestration...")
        signed = self._stage("sign", client.new_orchestration_from_build, build)
        self.log.info("Signed %d instructions successfully", signed.signed_count)
        self._emit("signed", request_id=build.request_id, instructions=signed.signed_count)

        self.log.info("Submitting signed orchestration...")
        self._stage("submit", client.new_orchestration, signed)
        self._emit("submitted", request_id=build.request_id)

        self.log.info("Settlement orchestration created successfully")
        self.log.info("RequestID: %s", build.request_id)
        self.log.info("Ephemeral wallet: %s", build.ephemeral_wallet_address)
        return build.request_id


def fetch_details(settings: Settings, request_id: str, *, signer_factory: SignerFactory = EthSigner) -> dict:
    signer = signer_factory(settings.private_key)
    client = OtimClient(signer, settings.api_url, settings.api_key, timeout=settings.http_timeout)
    try:
        return client.get_orchestration_details(request_id)
    finally:
        client.close()
