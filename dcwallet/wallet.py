#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# wallet.py
#
# Put it all together: mnemonic -> seed -> signing key + DID key -> DID
#
# Key separation (BIP-44 change level):
# - signing key: change=0, can rotate with different address indices
# - DID key: change=1, fixed at index 0, so the DID never changes for a seed
#
# Secrets (mnemonic words, seed, private keys) belong to the caller once
# returned. Call Wallet.wipe() when finished with them.
#
import sys

from .constants import *
from .bip39 import generate_mnemonic, validate_mnemonic, mnemonic_to_seed, normalize_mnemonic
from .did import generate_did_identifier, validate_entity_type
from .exceptions import InvalidMnemonic, InvalidParameter
from .keypath import derive_signing_key, derive_did_identifier_key, signing_key_path
from .keys import private_key_to_public_key
from .utils import B2A, path2str, secure_wipe, secure_wipe_words

# Change this to see derivation details (public values only) on stderr
VERBOSE = False

def _trace(msg):
    if VERBOSE:
        print(msg, file=sys.stderr)


class KeyPair:
    # private key (bytearray) and its compressed public key, plus where it came from
    __slots__ = ('private_key', 'public_key', 'path')

    def __init__(self, private_key, path):
        self.private_key = bytearray(private_key)
        self.public_key = private_key_to_public_key(self.private_key, compressed=True)
        self.path = list(path)

    def __repr__(self):
        return '<KeyPair %s %s>' % (path2str(self.path), self.public_key_hex)

    @property
    def public_key_hex(self):
        return B2A(self.public_key)

    def wipe(self):
        secure_wipe(self.private_key)


class Wallet:
    #
    # Everything derived from one mnemonic. Don't mix keys between wallets.
    #
    __slots__ = ('mnemonic', 'seed', 'signing_key', 'did_key', 'did',
                 'entity_type', 'address_index')

    def __init__(self, mnemonic, seed, signing_key, did_key, did, entity_type, address_index):
        self.mnemonic = mnemonic
        self.seed = seed
        self.signing_key = signing_key
        self.did_key = did_key
        self.did = did
        self.entity_type = entity_type
        self.address_index = address_index

    def __repr__(self):
        return '<Wallet %s signing=%s>' % (self.did, path2str(self.signing_key.path))

    def to_dict(self, include_secrets=False):
        # JSON-friendly view; private parts only on request
        rv = dict(did=self.did,
                  entity_type=self.entity_type,
                  address_index=self.address_index,
                  signing_key=dict(path=path2str(self.signing_key.path),
                                   public_key=self.signing_key.public_key_hex),
                  did_key=dict(path=path2str(self.did_key.path),
                               public_key=self.did_key.public_key_hex))

        if include_secrets:
            rv['mnemonic'] = ' '.join(self.mnemonic)
            rv['seed'] = B2A(self.seed)
            rv['signing_key']['private_key'] = B2A(self.signing_key.private_key)
            rv['did_key']['private_key'] = B2A(self.did_key.private_key)

        return rv

    def wipe(self):
        # zero everything secret we hold; object is useless afterwards
        secure_wipe_words(self.mnemonic)
        secure_wipe(self.seed)
        self.signing_key.wipe()
        self.did_key.wipe()


def _check_options(entity_type, address_index):
    if not validate_entity_type(entity_type):
        raise InvalidParameter("Invalid entity type. Must be 'u' (user) or 'i' (institution)")
    # raises if index is no good
    signing_key_path(address_index)

def _assemble(words, seed, entity_type, address_index):
    # derive both keys from the seed and build the DID from the DID key
    sk = derive_signing_key(seed, address_index)
    dk = derive_did_identifier_key(seed)
    try:
        signing_key = KeyPair(sk.private_key, sk.path)
        did_key = KeyPair(dk.private_key, dk.path)
    finally:
        sk.wipe()
        dk.wipe()

    # DID from DID key, NOT from signing key
    did = generate_did_identifier(did_key.private_key, entity_type)

    _trace(f"signing key {path2str(signing_key.path)}: {signing_key.public_key_hex}")
    _trace(f"DID key {path2str(did_key.path)}: {did_key.public_key_hex}")
    _trace(f"DID: {did}")

    return Wallet(words, seed, signing_key, did_key, did, entity_type, address_index)

def generate_wallet_from_mnemonic(words, entity_type=ENTITY_INSTITUTION, passphrase='',
                                  address_index=0):
    """
    Build the complete wallet from existing mnemonic words.

    Mnemonic is checked first: nothing is derived from a bad one.

    :param words: list of mnemonic words (a single string is split on whitespace)
    :param entity_type: 'u' for user, 'i' for institution (default='i')
    :param passphrase: optional BIP-39 passphrase
    :param address_index: signing key index (default=0)
    :return: Wallet
    :raises InvalidMnemonic: if validate_mnemonic() says no
    """
    if isinstance(words, str):
        words = normalize_mnemonic(words)

    if not validate_mnemonic(words):
        raise InvalidMnemonic("Invalid mnemonic")

    _check_options(entity_type, address_index)

    words = list(words)
    _trace(f"{len(words)}-word mnemonic ok")

    seed = mnemonic_to_seed(words, passphrase)
    try:
        return _assemble(words, seed, entity_type, address_index)
    except Exception:
        secure_wipe(seed)
        raise

# same thing, under the name the rest of the app calls it
recover_did_wallet = generate_wallet_from_mnemonic

def generate_new_wallet(entropy_bits=ENTROPY_BITS_24_WORDS, entity_type=ENTITY_INSTITUTION,
                        passphrase='', address_index=0):
    """
    Brand new wallet: random mnemonic, then as generate_wallet_from_mnemonic()

    :param entropy_bits: 128 (12 words) .. 256 (24 words, default)
    :param entity_type: 'u' for user, 'i' for institution (default='i')
    :param passphrase: optional BIP-39 passphrase
    :param address_index: signing key index (default=0)
    :return: Wallet
    """
    _check_options(entity_type, address_index)

    words = generate_mnemonic(entropy_bits)
    try:
        return generate_wallet_from_mnemonic(words, entity_type, passphrase, address_index)
    finally:
        # the wallet has its own copy
        secure_wipe_words(words)

def rotate_signing_key(wallet, address_index):
    """
    New wallet object for the same seed, with the signing key at another index.

    DID key and DID are derived again from the seed and come out the same.
    The old wallet is not changed; the new one has its own copies of secrets.

    :param wallet: Wallet, not yet wiped
    :param address_index: new signing key index
    :return: Wallet
    """
    _check_options(wallet.entity_type, address_index)

    if not any(wallet.seed):
        raise InvalidParameter("Wallet has been wiped")

    seed = bytearray(wallet.seed)
    try:
        return _assemble(list(wallet.mnemonic), seed, wallet.entity_type, address_index)
    except Exception:
        secure_wipe(seed)
        raise

# EOF
