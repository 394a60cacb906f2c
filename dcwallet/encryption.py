#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# encryption.py
#
# At-rest encryption for wallet secrets. Encrypt-then-MAC:
#
#   blob = hex( IV[16] || AES-256-CTR(enc_key, IV, plaintext) || HMAC-SHA256(mac_key, IV || ct)[32] )
#
# - MAC covers IV and ciphertext, and is checked before anything is decrypted
# - encryption and MAC keys come from one master secret via HKDF, with different labels
# - blob layout is persisted: do not change it
#
import os, re

from .constants import *
from .compat import aes_ctr, hkdf_sha256, hmac_sha256, consttime_equal
from .exceptions import InvalidParameter, IntegrityError, WalletError
from .utils import B2A, secure_wipe, force_bytes

# strictly lowercase, whole bytes only
_BLOB_REGEX = re.compile(r'(?:[0-9a-f]{2})*')

class WalletKeys(object):
    # the pair of symmetric keys for one wallet
    __slots__ = ('encryption_key', 'mac_key')

    def __init__(self, encryption_key, mac_key):
        if encryption_key is None or len(encryption_key) != WALLET_KEY_SIZE:
            raise InvalidParameter("Encryption key must be 32 bytes")
        if mac_key is None or len(mac_key) != WALLET_KEY_SIZE:
            raise InvalidParameter("MAC key must be 32 bytes")
        if bytes(encryption_key) == bytes(mac_key):
            raise InvalidParameter("Encryption key and MAC key must be different")

        self.encryption_key = bytearray(encryption_key)
        self.mac_key = bytearray(mac_key)

    def __repr__(self):
        return '<WalletKeys>'

    def wipe(self):
        secure_wipe(self.encryption_key)
        secure_wipe(self.mac_key)

def _as_wallet_keys(keys):
    # accept our own object, or a dict as {encryption_key=.., mac_key=..}
    if isinstance(keys, WalletKeys):
        return keys
    if isinstance(keys, dict):
        return WalletKeys(keys.get('encryption_key'), keys.get('mac_key'))
    raise InvalidParameter("Need WalletKeys (or dict) with encryption_key and mac_key")

def derive_keys_from_master_key(master_key):
    """
    Split one master secret into the encryption and MAC keys.

    HKDF-SHA256, empty salt, with info labels "wallet-encryption-v1"
    and "wallet-mac-v1". Knowing one of the keys tells you nothing about
    the other.

    :param master_key: secret bytes, at least 16 bytes
    :return: WalletKeys
    """
    if master_key is None or len(master_key) < 16:
        raise InvalidParameter("Master key must be at least 16 bytes")

    enc_key = bytearray(hkdf_sha256(master_key, HKDF_INFO_ENCRYPTION, WALLET_KEY_SIZE))
    mac_key = bytearray(hkdf_sha256(master_key, HKDF_INFO_MAC, WALLET_KEY_SIZE))
    try:
        return WalletKeys(enc_key, mac_key)
    finally:
        secure_wipe(enc_key)
        secure_wipe(mac_key)

def encrypt_wallet(plaintext, keys, iv=None):
    """
    Encrypt and authenticate some text.

    :param plaintext: str (encoded as UTF-8) or bytes
    :param keys: WalletKeys
    :param iv: 16-byte initial counter block (default=random, which you want)
    :return: lowercase hex string: IV || ciphertext || MAC
    """
    keys = _as_wallet_keys(keys)

    if iv is None:
        iv = os.urandom(IV_SIZE)
    elif len(iv) != IV_SIZE:
        raise InvalidParameter(f"IV must be {IV_SIZE} bytes")

    msg = bytearray(force_bytes(plaintext))
    try:
        ct = aes_ctr(keys.encryption_key, iv, msg)
    finally:
        secure_wipe(msg)

    mac = hmac_sha256(bytes(keys.mac_key), bytes(iv) + ct)

    return B2A(bytes(iv) + ct + mac)

def decrypt_wallet(blob, keys):
    """
    Check MAC, then decrypt. Nothing is decrypted unless the MAC is right.

    :param blob: hex string from encrypt_wallet()
    :param keys: WalletKeys
    :return: plaintext (str)
    :raises IntegrityError: blob was modified, corrupt, or keys are wrong
    """
    keys = _as_wallet_keys(keys)

    if not isinstance(blob, str):
        raise InvalidParameter("Encrypted wallet must be a hex string")

    # any damage to the text itself is treated like a bad MAC
    if not _BLOB_REGEX.fullmatch(blob):
        raise IntegrityError("Encrypted wallet is corrupt (not lowercase hex)")

    raw = bytes.fromhex(blob)
    if len(raw) < IV_SIZE + MAC_SIZE:
        raise IntegrityError("Encrypted wallet is too short")

    iv, ct, mac = raw[:IV_SIZE], raw[IV_SIZE:-MAC_SIZE], raw[-MAC_SIZE:]

    expect = hmac_sha256(bytes(keys.mac_key), iv + ct)
    if not consttime_equal(expect, mac):
        raise IntegrityError("Wallet MAC check failed: wrong key or tampered data")

    msg = bytearray(aes_ctr(keys.encryption_key, iv, ct))
    try:
        return msg.decode('utf-8')
    except UnicodeDecodeError:
        raise WalletError("Decrypted wallet is not UTF-8 text")
    finally:
        secure_wipe(msg)

# EOF
