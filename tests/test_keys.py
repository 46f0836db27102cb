"""Tests for admin key decoding and address derivation."""
from __future__ import annotations

import hashlib

import pytest

from crypto.keys import SigningIdentity, derive_sui_address, load_signing_identity
from issuer.errors import ConfigurationError

from conftest import RFC8032_PUBLIC_KEY, RFC8032_SEED, encode_sui_private_key


class TestLoadSigningIdentity:

    def test_derives_rfc8032_public_key(self, encoded_key):
        identity = load_signing_identity(encoded_key)
        assert identity.secret_key == RFC8032_SEED
        assert identity.public_key == RFC8032_PUBLIC_KEY

    def test_address_is_blake2b_of_flag_and_public_key(self, encoded_key):
        identity = load_signing_identity(encoded_key)
        expected = hashlib.blake2b(b"\x00" + RFC8032_PUBLIC_KEY, digest_size=32).hexdigest()
        assert identity.address == "0x" + expected
        assert len(identity.address) == 66

    def test_deterministic(self, encoded_key):
        addresses = {load_signing_identity(encoded_key).address for _ in range(5)}
        assert len(addresses) == 1

    def test_surrounding_whitespace_is_ignored(self, encoded_key):
        assert load_signing_identity(f"  {encoded_key}\n").address == load_signing_identity(encoded_key).address

    def test_secret_not_in_repr(self, identity):
        assert RFC8032_SEED.hex() not in repr(identity)
        assert repr(RFC8032_SEED) not in repr(identity)

    def test_identity_is_immutable(self, identity):
        with pytest.raises(AttributeError):
            identity.address = "0x0"


class TestRejectsBadKeys:

    def test_truncated(self, encoded_key):
        with pytest.raises(ConfigurationError):
            load_signing_identity(encoded_key[:-4])

    def test_corrupted_prefix(self, encoded_key):
        with pytest.raises(ConfigurationError):
            load_signing_identity("x" + encoded_key[1:])

    def test_wrong_prefix_with_valid_checksum(self):
        from crypto.encoding import bech32_encode_bytes
        other = bech32_encode_bytes(b"\x00" + RFC8032_SEED, "suipubkey")
        with pytest.raises(ConfigurationError):
            load_signing_identity(other)

    def test_unsupported_scheme(self):
        with pytest.raises(ConfigurationError, match="Secp256k1"):
            load_signing_identity(encode_sui_private_key(RFC8032_SEED, flag=0x01))

    def test_unknown_flag(self):
        with pytest.raises(ConfigurationError, match="unknown flag"):
            load_signing_identity(encode_sui_private_key(RFC8032_SEED, flag=0x07))

    def test_wrong_length(self):
        with pytest.raises(ConfigurationError, match="length"):
            load_signing_identity(encode_sui_private_key(RFC8032_SEED[:16]))

    def test_not_bech32(self):
        with pytest.raises(ConfigurationError):
            load_signing_identity("0x" + RFC8032_SEED.hex())

    def test_error_does_not_echo_key(self, encoded_key):
        bad = encoded_key[:-1] + ("q" if encoded_key[-1] != "q" else "p")
        with pytest.raises(ConfigurationError) as exc_info:
            load_signing_identity(bad)
        assert bad not in str(exc_info.value)
        assert bad not in (exc_info.value.detail or "")


def test_derive_sui_address_pads_to_32_bytes():
    address = derive_sui_address(bytes(32))
    assert address.startswith("0x")
    assert len(address) == 66


def test_signing_matches_rfc8032_vector(identity):
    from crypto.signing import ed25519_sign
    expected = bytes.fromhex(
        "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e065224901555"
        "fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b"
    )
    assert ed25519_sign(b"", identity.ecc_key()) == expected
