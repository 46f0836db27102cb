from __future__ import annotations

from unittest.mock import Mock

import base58
import pytest

from crypto.encoding import SUI_PRIVATE_KEY_PREFIX, bech32_encode_bytes
from crypto.keys import load_signing_identity
from issuer.models import CredentialRequest
from issuer.sui_client import SuiClient

# RFC 8032 section 7.1, TEST 1
RFC8032_SEED = bytes.fromhex("9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60")
RFC8032_PUBLIC_KEY = bytes.fromhex("d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a")

PACKAGE_ID = "0x" + "a1" * 32
ADMIN_CAP_ID = "0x" + "b2" * 32
VERSION_OBJECT_ID = "0x" + "c3" * 32
GAS_COIN_ID = "0x" + "d4" * 32


def encode_sui_private_key(seed: bytes, flag: int = 0x00) -> str:
    return bech32_encode_bytes(bytes([flag]) + seed, SUI_PRIVATE_KEY_PREFIX)


def b58_digest(fill: int) -> str:
    return base58.b58encode(bytes([fill]) * 32).decode("ascii")


@pytest.fixture
def encoded_key() -> str:
    return encode_sui_private_key(RFC8032_SEED)


@pytest.fixture
def identity(encoded_key):
    return load_signing_identity(encoded_key)


@pytest.fixture
def credential_request() -> CredentialRequest:
    return CredentialRequest(
        recipient_email="a@b.com",
        recipient_name="Alice",
        course_name="X101",
        issue_date="2024-01-01",
    )


@pytest.fixture
def settings_kwargs(encoded_key):
    return {
        "_env_file": None,
        "publisher_url": "https://publisher.walrus-testnet.example",
        "sui_network": "testnet",
        "sui_package_id": PACKAGE_ID,
        "sui_admin_cap_id": ADMIN_CAP_ID,
        "version_object_id": VERSION_OBJECT_ID,
        "admin_private_key": encoded_key,
    }


def make_sui_client(execute_result=None) -> Mock:
    """A SuiClient double that knows the admin cap (owned), version (shared) and one gas coin."""
    client = Mock(spec=SuiClient)

    def get_object(object_id):
        if object_id == VERSION_OBJECT_ID:
            return {
                "objectId": VERSION_OBJECT_ID,
                "version": "42",
                "digest": b58_digest(2),
                "owner": {"Shared": {"initial_shared_version": 3}},
            }
        return {
            "objectId": object_id,
            "version": "17",
            "digest": b58_digest(1),
            "owner": {"AddressOwner": "0x" + "00" * 32},
        }

    client.get_object.side_effect = get_object
    client.get_normalized_move_function.return_value = {
        "parameters": [
            {"Reference": {"Struct": {"name": "AdminCap"}}},
            {"Reference": {"Struct": {"name": "Version"}}},
            "Address",
            {"Struct": {"name": "String"}},
            {"Struct": {"name": "String"}},
            {"Struct": {"name": "String"}},
            {"Struct": {"name": "String"}},
            {"Struct": {"name": "String"}},
            {"MutableReference": {"Struct": {"name": "TxContext"}}},
        ]
    }
    client.get_reference_gas_price.return_value = 1000
    client.get_coins.return_value = [{
        "coinObjectId": GAS_COIN_ID,
        "version": "9",
        "digest": b58_digest(3),
        "balance": "1000000000",
    }]
    client.execute_transaction_block.return_value = execute_result or {
        "digest": "D1",
        "effects": {"status": {"status": "success"}},
    }
    return client


@pytest.fixture
def sui_client() -> Mock:
    return make_sui_client()
