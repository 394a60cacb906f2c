#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# keys.py
#
# secp256k1 public keys and signatures, on top of compat.py
#
from .constants import *
from .compat import CT_priv_to_pubkey, CT_sign, CT_sig_verify
from .exceptions import InvalidParameter, InvalidKey
from .utils import B2A

def private_key_to_public_key(private_key, compressed=True):
    # 33 bytes compressed (default), or 65 bytes uncompressed
    if private_key is None or len(private_key) != KEY_SIZE:
        raise InvalidParameter("Private key must be 32 bytes")

    try:
        return CT_priv_to_pubkey(private_key, compressed=compressed)
    except ValueError as exc:
        raise InvalidKey(f"Invalid private key: {exc}")

def get_public_key_formats(private_key):
    # both serializations, as bytes and as hex
    compressed = private_key_to_public_key(private_key, True)
    uncompressed = private_key_to_public_key(private_key, False)

    return dict(compressed=compressed,
                uncompressed=uncompressed,
                compressed_hex=B2A(compressed),
                uncompressed_hex=B2A(uncompressed))

def sign_digest(private_key, digest):
    # 64-byte compact ECDSA signature over an already-hashed message
    if private_key is None or len(private_key) != KEY_SIZE:
        raise InvalidParameter("Private key must be 32 bytes")
    if digest is None or len(digest) != 32:
        raise InvalidParameter("Digest must be 32 bytes")

    try:
        return CT_sign(private_key, bytes(digest))
    except ValueError as exc:
        raise InvalidKey(f"Invalid private key: {exc}")

def verify_digest(public_key, digest, sig):
    # returns True or False, never raises
    if not public_key or not digest or not sig:
        return False
    return CT_sig_verify(bytes(public_key), bytes(digest), bytes(sig))

# EOF
