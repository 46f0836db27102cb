from Crypto.Signature import eddsa
from Crypto.PublicKey import ECC

from crypto.encoding import b64_encode
from crypto.hashing import blake2b256
from crypto.keys import ED25519_FLAG, SigningIdentity

# IntentScope::TransactionData, IntentVersion::V0, AppId::Sui
TRANSACTION_INTENT = bytes([0, 0, 0])

def ed25519_sign(message: bytes, sk: ECC.EccKey) -> bytes:
    """
    Standard Ed25519 over the raw message bytes (RFC8032).
    A new signer is created per call, so this is safe to run from many threads.
    """
    signer = eddsa.new(sk, mode="rfc8032")
    return signer.sign(message)

def ed25519_verify(message: bytes, sig: bytes, pk: ECC.EccKey) -> bool:
    """
    Verify standard Ed25519 signature over raw message bytes.
    """
    try:
        verifier = eddsa.new(pk, mode="rfc8032")
        verifier.verify(message, sig)
        return True
    except ValueError:
        return False

def transaction_signing_digest(tx_bytes: bytes) -> bytes:
    return blake2b256(TRANSACTION_INTENT + tx_bytes)

def sign_transaction(tx_bytes: bytes, identity: SigningIdentity) -> str:
    """
    Sign BCS TransactionData and return the serialized Sui signature
    `flag || signature || public key`, Base64 encoded.
    """
    sig = ed25519_sign(transaction_signing_digest(tx_bytes), identity.ecc_key())
    return b64_encode(bytes([ED25519_FLAG]) + sig + identity.public_key)
