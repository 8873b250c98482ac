import json
from dataclasses import replace

import pytest

from fakes import FakeClient, FakeSigner
from otim_settle.domain import SignerError, StageError
from otim_settle.infra import RuntimeEventLogger
from otim_settle.runtime import SettlementApp


def _app(settings, client=None, signer_factory=None, events=None):
    client = client or FakeClient()
    app = SettlementApp(
        settings,
        signer_factory=signer_factory or (lambda key: FakeSigner()),
        client_factory=lambda signer, s: client,
        events=events,
    )
    return app, client


def test_full_run_returns_build_request_id(settings) -> None:
    app, client = _app(settings)
    request_id = app.run()
    assert client.calls == ["build", "sign", "submit"]
    assert request_id == client.issued[0]
    assert client.closed


def test_build_request_contents(settings) -> None:
    app, client = _app(settings)
    app.run()
    req = client.requests[0]
    assert sorted(req.accepted_tokens) == [1, 8453]
    assert req.settlement_amount == 1_000_000
    assert req.recipient_address == settings.recipient_address


@pytest.mark.parametrize(
    "fail, expected_calls",
    [
        ("build", ["build"]),
        ("sign", ["build", "sign"]),
        ("submit", ["build", "sign", "submit"]),
    ],
)
def test_failure_stops_sequence(settings, fail, expected_calls) -> None:
    app, client = _app(settings, client=FakeClient(fail=fail))
    with pytest.raises(StageError) as err:
        app.run()
    assert err.value.stage == fail
    assert str(err.value).startswith(f"{fail} failed: ")
    assert isinstance(err.value.__cause__, RuntimeError)
    assert client.calls == expected_calls
    assert client.closed


def test_signer_failure_skips_client(settings) -> None:
    built = []

    def bad_signer(key):
        raise SignerError("invalid private key: ValueError")

    app = SettlementApp(
        settings,
        signer_factory=bad_signer,
        client_factory=lambda signer, s: built.append(signer),
    )
    with pytest.raises(StageError) as err:
        app.run()
    assert err.value.stage == "signer"
    assert built == []


def test_bad_recipient_fails_before_network(settings) -> None:
    app, client = _app(replace(settings, recipient_address="0xnope"))
    with pytest.raises(StageError) as err:
        app.run()
    assert err.value.stage == "request"
    assert client.calls == []


def test_each_run_creates_new_request(settings) -> None:
    client = FakeClient()
    app, _ = _app(settings, client=client)
    first = app.run()
    second = app.run()
    assert first != second
    assert client.issued == [first, second]


def test_events_written(settings, tmp_path) -> None:
    events = RuntimeEventLogger(str(tmp_path))
    app, _ = _app(settings, client=FakeClient(fail="submit"), events=events)
    with pytest.raises(StageError):
        app.run()
    rows = [json.loads(line) for line in events.path.read_text().splitlines()]
    assert [r["event"] for r in rows] == ["build_ok", "signed", "failed"]
    assert rows[-1]["stage"] == "submit"


class _BrokenSink:
    def __init__(self, fail_on: str):
        self.fail_on = fail_on
        self.seen = []

    def emit(self, event: str, **fields) -> None:
        if event == self.fail_on:
            raise OSError("disk full")
        self.seen.append(event)


class _Log:
    def __init__(self) -> None:
        self.warnings = []

    def info(self, msg, *args) -> None:
        pass

    def warning(self, msg, *args) -> None:
        self.warnings.append(msg % args)


@pytest.mark.parametrize("fail_on", ["build_ok", "signed", "submitted"])
def test_event_log_failure_keeps_request_id(settings, fail_on) -> None:
    client = FakeClient()
    log = _Log()
    app = SettlementApp(
        settings,
        log=log,
        signer_factory=lambda key: FakeSigner(),
        client_factory=lambda signer, s: client,
        events=_BrokenSink(fail_on),
    )
    request_id = app.run()
    assert request_id == client.issued[0]
    assert client.calls == ["build", "sign", "submit"]
    assert len(log.warnings) == 1
    assert "disk full" in log.warnings[0]


def test_event_log_failure_keeps_stage_error(settings) -> None:
    log = _Log()
    app = SettlementApp(
        settings,
        log=log,
        signer_factory=lambda key: FakeSigner(),
        client_factory=lambda signer, s: FakeClient(fail="build"),
        events=_BrokenSink("failed"),
    )
    with pytest.raises(StageError) as err:
        app.run()
    assert err.value.stage == "build"
    assert "disk full" in log.warnings[0]


def test_unusable_events_dir_does_not_block_run(settings, tmp_path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    client = FakeClient()
    log = _Log()
    app = SettlementApp(
        replace(settings, events_dir=str(blocker)),
        log=log,
        signer_factory=lambda key: FakeSigner(),
        client_factory=lambda signer, s: client,
    )
    assert app.run() == client.issued[0]
    assert len(log.warnings) == 3
