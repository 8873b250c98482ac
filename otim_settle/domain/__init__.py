from .errors import (
    ClientError,
    InvalidConfigError,
    MissingConfigError,
    OtimApiError,
    SettleError,
    SignerError,
    StageError,
)
from .models import (
    Authorization,
    BuildResponse,
    Instruction,
    SettlementRequest,
    Signature,
    SignedAuthorization,
    SignedInstruction,
    SignedOrchestration,
)

__all__ = [
    "Authorization",
    "BuildResponse",
    "ClientError",
    "Instruction",
    "InvalidConfigError",
    "MissingConfigError",
    "OtimApiError",
    "SettleError",
    "SettlementRequest",
    "Signature",
    "SignedAuthorization",
    "SignedInstruction",
    "SignedOrchestration",
    "SignerError",
    "StageError",
]
