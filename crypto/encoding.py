import base64
from typing import Iterable, List, Union

import base58

SUI_PRIVATE_KEY_PREFIX = "suiprivkey"

BECH32_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_BECH32_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)
_BECH32_MAX_LENGTH = 90

def b64_encode(data: bytes) -> str:
    """Standard Base64 (with padding), as used by the Sui JSON-RPC API."""
    return base64.b64encode(data).decode('ascii')

def b64_decode(s: Union[str, bytes]) -> bytes:
    if isinstance(s, str):
        s = s.encode("ascii")
    return base64.b64decode(s, validate=True)

def b58_decode(s: str) -> bytes:
    """Object and transaction digests come back from the RPC as Base58."""
    return base58.b58decode(s)

# --- Bech32 (BIP-173), the text form of Sui private keys ---------------------

def _bech32_polymod(values: Iterable[int]) -> int:
    chk = 1
    for v in values:
        top = chk >> 25
        chk = (chk & 0x1FFFFFF) << 5 ^ v
        for i, g in enumerate(_BECH32_GENERATOR):
            if (top >> i) & 1:
                chk ^= g
    return chk

def _bech32_hrp_expand(hrp: str) -> List[int]:
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]

def _convert_bits(data: Iterable[int], from_bits: int, to_bits: int, pad: bool) -> List[int]:
    acc = bits = 0
    out = []
    maxv = (1 << to_bits) - 1
    for value in data:
        if value < 0 or value >> from_bits:
            raise ValueError("invalid data value")
        acc = (acc << from_bits) | value
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            out.append((acc >> bits) & maxv)
    if pad:
        if bits:
            out.append((acc << (to_bits - bits)) & maxv)
    elif bits >= from_bits or (acc << (to_bits - bits)) & maxv:
        raise ValueError("invalid bech32 padding")
    return out

def bech32_decode_bytes(s: str, hrp: str) -> bytes:
    """
    Decode a Bech32 string into 8-bit payload bytes.
    Raises ValueError on bad checksum, bad characters or a prefix other than `hrp`.
    """
    if len(s) > _BECH32_MAX_LENGTH:
        raise ValueError("bech32 string too long")
    if any(ord(c) < 33 or ord(c) > 126 for c in s):
        raise ValueError("invalid character in bech32 string")
    if s.lower() != s and s.upper() != s:
        raise ValueError("mixed case bech32 string")
    s = s.lower()
    pos = s.rfind("1")
    if pos < 1 or pos + 7 > len(s):
        raise ValueError("missing bech32 separator or checksum")
    found_hrp, data_part = s[:pos], s[pos + 1:]
    if any(c not in BECH32_CHARSET for c in data_part):
        raise ValueError("invalid character in bech32 data")
    data = [BECH32_CHARSET.index(c) for c in data_part]
    if _bech32_polymod(_bech32_hrp_expand(found_hrp) + data) != 1:
        raise ValueError("invalid bech32 checksum")
    if found_hrp != hrp:
        raise ValueError(f"unexpected bech32 prefix {found_hrp!r}")
    return bytes(_convert_bits(data[:-6], 5, 8, pad=False))

def bech32_encode_bytes(payload: bytes, hrp: str) -> str:
    data = _convert_bits(payload, 8, 5, pad=True)
    polymod = _bech32_polymod(_bech32_hrp_expand(hrp) + data + [0] * 6) ^ 1
    checksum = [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]
    return hrp + "1" + "".join(BECH32_CHARSET[d] for d in data + checksum)

# --- Sui addresses -----------------------------------------------------------

def normalize_sui_address(value: str) -> str:
    """Lowercase, 0x-prefixed, left-padded to 32 bytes."""
    v = value.strip().lower()
    if v.startswith("0x"):
        v = v[2:]
    if not v or len(v) > 64:
        raise ValueError(f"invalid Sui address or object id: {value!r}")
    int(v, 16)
    return "0x" + v.rjust(64, "0")

def address_bytes(value: str) -> bytes:
    return bytes.fromhex(normalize_sui_address(value)[2:])
