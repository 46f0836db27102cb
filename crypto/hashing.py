from Crypto.Hash import BLAKE2b

def blake2b256(data: bytes) -> bytes:
    h = BLAKE2b.new(digest_bits=256)
    h.update(data)
    return h.digest()
