#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# did.py
#
# DID strings:
#
#   did:dcert:{u|i}{base64url(compressed pubkey)}
#
# - 'u' prefix = user DID, 'i' prefix = institution DID
# - pubkey is 33 bytes, so base64url without padding is always 44 chars
# - the public key can be read back out of the DID for verification
#
# Parsing never raises: untrusted input is screened with is_valid / None.
#
import re, binascii
from typing import NamedTuple, Optional

from .constants import *
from .exceptions import InvalidParameter, WalletError
from .keys import private_key_to_public_key
from .utils import b64url_encode, b64url_decode

DID_REGEX = re.compile(r'did:([a-zA-Z0-9]+):([ui])([A-Za-z0-9_-]+)')

class ParsedDID(NamedTuple):
    method: str
    entity_type: str
    identifier: str
    is_valid: bool

INVALID_DID = ParsedDID('', '', '', False)

def validate_entity_type(entity_type):
    return isinstance(entity_type, str) and entity_type in ENTITY_TYPES

def did_from_public_key(public_key, entity_type=ENTITY_INSTITUTION):
    # build the DID around an existing compressed public key
    if not validate_entity_type(entity_type):
        raise InvalidParameter("Invalid entity type. Must be 'u' (user) or 'i' (institution)")
    if public_key is None or len(public_key) != COMPRESSED_PUBKEY_SIZE:
        raise InvalidParameter(f"Public key must be {COMPRESSED_PUBKEY_SIZE} bytes (compressed)")

    ident = b64url_encode(public_key)
    if len(ident) != DID_BASE64URL_LENGTH:
        raise WalletError(f"Invalid base64url length: {len(ident)} "
                          f"(expected {DID_BASE64URL_LENGTH} characters)")

    return f'did:{DID_METHOD}:{entity_type}{ident}'

def generate_did_identifier(private_key, entity_type=ENTITY_INSTITUTION):
    """
    Make the DID for a private key.

    Call this with the key from derive_did_identifier_key(), not the
    signing key: the DID key sits at m/44'/1001'/0'/1'/0'.

    :param private_key: 32 bytes
    :param entity_type: 'u' for user, 'i' for institution (default='i')
    :return: DID string, did:dcert:{u|i}{44 chars}
    """
    if private_key is None or len(private_key) != KEY_SIZE:
        raise InvalidParameter("Private key must be 32 bytes")
    if not validate_entity_type(entity_type):
        raise InvalidParameter("Invalid entity type. Must be 'u' (user) or 'i' (institution)")

    pubkey = private_key_to_public_key(private_key, compressed=True)
    if len(pubkey) != COMPRESSED_PUBKEY_SIZE:
        raise WalletError(f"Invalid public key length: {len(pubkey)} (expected 33 bytes)")

    return did_from_public_key(pubkey, entity_type)

def parse_did(did) -> ParsedDID:
    # split a DID into parts; is_valid only if grammar and method are both right
    if not isinstance(did, str):
        return INVALID_DID

    m = DID_REGEX.fullmatch(did)
    if not m:
        return INVALID_DID

    method, entity_type, identifier = m.groups()

    return ParsedDID(method, entity_type, identifier,
                     method == DID_METHOD and validate_entity_type(entity_type))

def extract_public_key_from_did(did) -> Optional[bytes]:
    # compressed public key embedded in DID, or None for any problem
    parsed = parse_did(did)
    if not parsed.is_valid:
        return None

    try:
        pubkey = b64url_decode(parsed.identifier)
    except (binascii.Error, ValueError):
        return None

    if len(pubkey) != COMPRESSED_PUBKEY_SIZE:
        return None

    return pubkey

# EOF
