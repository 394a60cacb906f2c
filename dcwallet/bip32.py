#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# bip32.py
#
# Hardened-only hierarchical deterministic key tree.
#
# NOTE: child private key is IL itself, not IL + kpar (mod n) as in BIP-32.
# Every DID issued so far depends on this, so it cannot change.
#
from typing import Iterable, Tuple

import base58

from .constants import *
from .compat import hash160, hmac_sha512, CT_priv_to_pubkey
from .exceptions import InvalidParameter, InvalidKey
from .utils import path2str, secure_wipe


def big_endian_to_int(b: bytes) -> int:
    # unsigned, most significant byte first
    return int.from_bytes(b, "big")


def int_to_big_endian(n: int, length: int) -> bytes:
    # fixed width, raises OverflowError if n does not fit
    return n.to_bytes(length, "big")


def _check_private_key(key: bytes, what: str) -> None:
    # In case parse256(IL) is 0 or >= n, the key is invalid. We do not
    # move on to the next index: caller decides what to do.
    num = big_endian_to_int(key)
    if num == 0:
        raise InvalidKey(f"Invalid private key: {what} is zero")
    if num >= SECP256K1_ORDER:
        raise InvalidKey(f"Invalid private key: {what} exceeds secp256k1 order")


def derive_hardened_child_key(parent_private_key: bytes, parent_chain_code: bytes,
                              index: int) -> Tuple[bytearray, bytearray]:
    """
    Hardened child key derivation:

    * Require i >= 2**31 (hardened child); anything else is refused.
    * let I = HMAC-SHA512(Key=cpar, Data=0x00 || ser256(kpar) || ser32(i))
    * Split I into two 32-byte sequences, IL and IR.
    * The returned child key ki is IL, the returned chain code ci is IR.
    * In case IL is 0 or >= n, fail with InvalidKey.

    :param parent_private_key: 32 bytes
    :param parent_chain_code: 32 bytes
    :param index: derivation index, including the hardened bit
    :return: (child private key, child chain code)
    """
    if parent_private_key is None or len(parent_private_key) != KEY_SIZE:
        raise InvalidParameter("Parent private key must be 32 bytes")
    if parent_chain_code is None or len(parent_chain_code) != KEY_SIZE:
        raise InvalidParameter("Parent chain code must be 32 bytes")
    if not isinstance(index, int) or isinstance(index, bool):
        raise InvalidParameter("Index must be an integer")
    if index < HARDENED:
        raise InvalidParameter("Index must be >= 0x80000000 for hardened derivation")
    if index > 0xFFFF_FFFF:
        raise InvalidParameter("Index must fit in 32 bits")

    data = bytearray(b"\x00" + bytes(parent_private_key) + int_to_big_endian(index, 4))
    I = bytearray(hmac_sha512(bytes(parent_chain_code), bytes(data)))
    secure_wipe(data)

    IL, IR = I[:32], I[32:]
    secure_wipe(I)

    try:
        _check_private_key(IL, "derived key")
    except InvalidKey:
        secure_wipe(IL)
        secure_wipe(IR)
        raise

    return IL, IR


class ExtendedKey(object):
    """
    Private key plus chain code, and where it sits in the tree.

    Only the parent's public key is kept (for the fingerprint), never
    the parent node itself. Private key and chain code are bytearrays;
    call wipe() when done with them.
    """

    __slots__ = (
        "private_key",
        "chain_code",
        "path",
        "parent_pubkey",
    )

    def __init__(self, private_key: bytes, chain_code: bytes, path: Iterable[int] = (),
                 parent_pubkey: bytes = None):
        """
        :param private_key: 32 byte private key
        :param chain_code: 32 byte chain code
        :param path: indices from master to this node (default=(), the master)
        :param parent_pubkey: compressed public key of parent node (default=None)
        """
        if private_key is None or len(private_key) != KEY_SIZE:
            raise InvalidParameter("Private key must be 32 bytes")
        if chain_code is None or len(chain_code) != KEY_SIZE:
            raise InvalidParameter("Chain code must be 32 bytes")

        self.private_key = bytearray(private_key)
        self.chain_code = bytearray(chain_code)
        self.path = tuple(path)
        self.parent_pubkey = parent_pubkey

    def __eq__(self, other) -> bool:
        if type(self) != type(other):
            return False
        return self.private_key == other.private_key and \
            self.chain_code == other.chain_code and \
            self.path == other.path

    def __repr__(self) -> str:
        return '<%s %s>' % (self.__class__.__name__, path2str(self.path))

    @property
    def depth(self) -> int:
        return len(self.path)

    @property
    def index(self) -> int:
        return self.path[-1] if self.path else 0

    def is_master(self) -> bool:
        """Check whether current key node is master node."""
        return not self.path

    def is_hardened(self) -> bool:
        """Check whether current key node is hardened."""
        return self.index >= HARDENED

    def public_key(self, compressed: bool = True) -> bytes:
        return CT_priv_to_pubkey(self.private_key, compressed=compressed)

    def sec(self) -> bytes:
        return self.public_key(compressed=True)

    def fingerprint(self) -> bytes:
        """
        Key identifier used by children to point back here.

        :return: first four bytes of RIPEMD160(SHA256(public key))
        """
        return hash160(self.sec())[:4]

    @property
    def parent_fingerprint(self) -> bytes:
        if self.parent_pubkey is None:
            # master, or parent unknown
            return b"\x00\x00\x00\x00"
        return hash160(self.parent_pubkey)[:4]

    def ckd(self, index: int) -> "ExtendedKey":
        """
        Derive hardened child of this node.

        :param index: derivation index, hardened bit included
        :return: derived child
        """
        key, chain = derive_hardened_child_key(self.private_key, self.chain_code, index)
        child = self.__class__(key, chain, path=self.path + (index,), parent_pubkey=self.sec())
        secure_wipe(key)
        secure_wipe(chain)
        return child

    def derive_path(self, index_list: Iterable[int]) -> "ExtendedKey":
        """
        Walk down from this node, one hardened step per index.

        Intermediate nodes are wiped on the way; this node is left alone.

        :param index_list: indices, hardened bit included
        :return: final node
        """
        node = self
        for i in index_list:
            nxt = node.ckd(index=i)
            if node is not self:
                node.wipe()
            node = nxt
        return node

    def _serialize(self, key: bytes, version: int) -> bytes:
        # version (4)
        result = int_to_big_endian(version, 4)
        # depth (1): zero at master
        result += int_to_big_endian(self.depth, 1)
        # parent fingerprint (4), zeros at master
        result += self.parent_fingerprint
        # child number (4), hardened bit included
        result += int_to_big_endian(self.index, 4)
        # chain code (32)
        result += bytes(self.chain_code)
        # key data (33): compressed pubkey, or 0x00 + private key
        result += key
        return result

    def extended_private_key(self, version: int = XPRV_VERSION) -> str:
        """
        Base58Check of serialized node, private (xprv...)

        :param version: extended private key version (default=mainnet)
        :return: extended private key
        """
        raw = self._serialize(b"\x00" + bytes(self.private_key), version)
        return base58.b58encode_check(raw).decode('ascii')

    def extended_public_key(self, version: int = XPUB_VERSION) -> str:
        """
        Base58Check of serialized node, public only (xpub...)

        :param version: extended public key version (default=mainnet)
        :return: extended public key
        """
        return base58.b58encode_check(self._serialize(self.sec(), version)).decode('ascii')

    def wipe(self) -> None:
        secure_wipe(self.private_key)
        secure_wipe(self.chain_code)


def seed_to_master_key(seed: bytes) -> ExtendedKey:
    """
    Generates master key node from bip39 seed.

    * Calculate I = HMAC-SHA512(Key = "Bitcoin seed", Data = S)
    * Split I into two 32-byte sequences, IL and IR.
    * Use parse256(IL) as master secret key, and IR as master chain code.

    :param seed: BIP-39 seed, normally 64 bytes (16 to 64 allowed)
    :return: master key node
    """
    if seed is None or not (16 <= len(seed) <= 64):
        raise InvalidParameter("Seed must be between 16 and 64 bytes")

    I = bytearray(hmac_sha512(BIP32_SEED_KEY, bytes(seed)))
    IL, IR = I[:32], I[32:]
    secure_wipe(I)
    try:
        _check_private_key(IL, "master key")
        return ExtendedKey(IL, IR)
    finally:
        secure_wipe(IL)
        secure_wipe(IR)

# EOF
