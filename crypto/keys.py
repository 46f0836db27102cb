from dataclasses import dataclass, field

from Crypto.PublicKey import ECC

from crypto.encoding import SUI_PRIVATE_KEY_PREFIX, bech32_decode_bytes
from crypto.hashing import blake2b256
from issuer.errors import ConfigurationError

ED25519_FLAG = 0x00
SECRET_KEY_SIZE = 32

# Flags Sui uses for other schemes; recognised only to give a clearer error.
_KNOWN_SCHEMES = {0x00: "ED25519", 0x01: "Secp256k1", 0x02: "Secp256r1"}

@dataclass(frozen=True)
class SigningIdentity:
    """
    The admin key pair the service signs with. Built once at startup and shared
    read-only by every request; never mutate it.
    """
    secret_key: bytes = field(repr=False)
    public_key: bytes
    address: str

    def ecc_key(self) -> ECC.EccKey:
        return ECC.construct(curve="Ed25519", seed=self.secret_key)

def decode_sui_private_key(encoded: str) -> bytes:
    """Decode `suiprivkey1...` into the raw 32-byte Ed25519 seed."""
    try:
        payload = bech32_decode_bytes(encoded.strip(), SUI_PRIVATE_KEY_PREFIX)
    except (ValueError, AttributeError, TypeError) as e:
        raise ConfigurationError("ADMIN_PRIVATE_KEY is not a valid Sui private key", detail=str(e)) from None

    if len(payload) != SECRET_KEY_SIZE + 1:
        raise ConfigurationError("ADMIN_PRIVATE_KEY has an unexpected length")
    flag = payload[0]
    if flag != ED25519_FLAG:
        scheme = _KNOWN_SCHEMES.get(flag, f"unknown flag {flag:#04x}")
        raise ConfigurationError(f"ADMIN_PRIVATE_KEY uses unsupported scheme {scheme}")
    return payload[1:]

def derive_sui_address(public_key: bytes) -> str:
    return "0x" + blake2b256(bytes([ED25519_FLAG]) + public_key).hex()

def load_signing_identity(encoded: str) -> SigningIdentity:
    secret = decode_sui_private_key(encoded)
    sk = ECC.construct(curve="Ed25519", seed=secret)
    public_key = sk.public_key().export_key(format="raw")
    return SigningIdentity(
        secret_key=secret,
        public_key=public_key,
        address=derive_sui_address(public_key),
    )
