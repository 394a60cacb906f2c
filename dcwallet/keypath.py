#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# keypath.py
#
# Which keys come from where. Two hardened subtrees of one seed:
#
#   signing key:   m/44'/1001'/0'/0'/{index}'     (rotate by picking a new index)
#   DID key:       m/44'/1001'/0'/1'/0'           (never changes for a given seed)
#
# The DID path has no parameters at all: that is what keeps a DID stable
# while signing keys are rotated underneath it.
#
from typing import List

from .constants import *
from .bip32 import ExtendedKey, seed_to_master_key
from .exceptions import InvalidParameter

def account_path() -> List[int]:
    # m/44'/1001'/0'
    return [DID_PURPOSE | HARDENED, DID_COIN_TYPE | HARDENED, DID_ACCOUNT | HARDENED]

def signing_key_path(address_index: int = 0) -> List[int]:
    # m/44'/1001'/0'/0'/{address_index}'
    if not isinstance(address_index, int) or isinstance(address_index, bool) \
            or not (0 <= address_index < HARDENED):
        raise InvalidParameter("Address index must be a non-negative integer below 2**31")

    return account_path() + [SIGNING_CHANGE | HARDENED, address_index | HARDENED]

def did_key_path() -> List[int]:
    # m/44'/1001'/0'/1'/0'
    return account_path() + [DID_CHANGE | HARDENED, DID_ADDRESS_INDEX | HARDENED]

def derive_path(seed: bytes, path: List[int]) -> ExtendedKey:
    # walk any all-hardened path from the master key of this seed
    master = seed_to_master_key(seed)
    try:
        return master.derive_path(path) if path else master
    finally:
        if path:
            master.wipe()

def derive_signing_key(seed: bytes, address_index: int = 0) -> ExtendedKey:
    """
    Derive the signing key: m/44'/1001'/0'/0'/{address_index}'

    Each address index gives an unrelated key; picking a new index is how
    the signing key is rotated.

    :param seed: BIP-39 seed (64 bytes)
    :param address_index: index for the last level (default=0)
    :return: extended key node, private key and chain code
    """
    return derive_path(seed, signing_key_path(address_index))

def derive_did_identifier_key(seed: bytes) -> ExtendedKey:
    """
    Derive the DID identifier key: m/44'/1001'/0'/1'/0'

    Only ever used to build the DID string. Not for signing.

    :param seed: BIP-39 seed (64 bytes)
    :return: extended key node, private key and chain code
    """
    return derive_path(seed, did_key_path())

# EOF
