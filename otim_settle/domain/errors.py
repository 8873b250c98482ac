from __future__ import annotations


class SettleError(Exception):
    """Base for every terminal failure of a settlement run."""


class MissingConfigError(SettleError):
    def __init__(self, variable: str):
        super().__init__(f"{variable} environment variable is required")
        self.variable = variable


class InvalidConfigError(SettleError):
    def __init__(self, variable: str, raw: str, reason: str):
        super().__init__(f"{variable}={raw!r} is invalid: {reason}")
        self.variable = variable
        self.raw = raw


class SignerError(SettleError):
    """Signer could not be constructed or could not produce a signature."""


class ClientError(SettleError):
    """Client construction, transport or response decoding failure."""


class OtimApiError(ClientError):
    """Non-2xx answer from the orchestration API."""

    def __init__(self, *, status: int, message: str, code: str | None = None, path: str = ""):
        super().__init__(f"http {status} {path}: {message}" if path else f"http {status}: {message}")
        self.status = status
        self.code = code
        self.path = path


class StageError(SettleError):
    """A driver stage failed. The underlying error is chained as __cause__."""

    def __init__(self, stage: str, cause: BaseException):
        super().__init__(f"{stage} failed: {cause}")
        self.stage = stage
        self.cause = cause
