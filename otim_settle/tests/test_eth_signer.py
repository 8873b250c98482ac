import pytest
from eth_account import Account
from eth_account.messages import encode_typed_data

from otim_settle.domain import SignerError
from otim_settle.signer import EthSigner, Signer

KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"

TYPED = {
    "types": {
        "EIP712Domain": [
            {"name": "name", "type": "string"},
            {"name": "version", "type": "string"},
            {"name": "chainId", "type": "uint256"},
            {"name": "verifyingContract", "type": "address"},
        ],
        "Instruction": [
            {"name": "salt", "type": "uint256"},
            {"name": "maxExecutions", "type": "uint256"},
            {"name": "action", "type": "address"},
        ],
    },
    "primaryType": "Instruction",
    "domain": {
        "name": "OtimDelegate",
        "version": "1",
        "chainId": 8453,
        "verifyingContract": "0x000000000000000000000000000000000000beef",
    },
    "message": {
        "salt": 42,
        "maxExecutions": 1,
        "action": "0x000000000000000000000000000000000000dead",
    },
}


def test_address_from_key() -> None:
    signer = EthSigner(KEY)
    assert signer.address == ADDRESS
    assert isinstance(signer, Signer)


def test_key_without_prefix_accepted() -> None:
    assert EthSigner(KEY[2:]).address == ADDRESS


@pytest.mark.parametrize("bad", ["0x1234", "not-hex-at-all", "0x" + "00" * 32])
def test_malformed_key_rejected(bad) -> None:
    with pytest.raises(SignerError) as err:
        EthSigner(bad)
    assert bad not in str(err.value)


def test_typed_data_signature_recovers_signer() -> None:
    sig = EthSigner(KEY).sign_typed_data(TYPED)
    assert len(sig.r) == 66 and len(sig.s) == 66
    recovered = Account.recover_message(
        encode_typed_data(full_message=TYPED),
        vrs=(sig.v, int(sig.r, 16), int(sig.s, 16)),
    )
    assert recovered == ADDRESS


def test_authorization_signature() -> None:
    sig = EthSigner(KEY).sign_authorization(8453, "0x000000000000000000000000000000000000beef", 0)
    assert sig.v in (0, 1)
    assert sig.r.startswith("0x") and len(sig.r) == 66
