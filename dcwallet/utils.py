#
# (c) Copyright 2021 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
import base64
from binascii import b2a_hex
from .constants import HARDENED
from .exceptions import InvalidParameter

# show bytes as hex in a string
B2A = lambda x: b2a_hex(x).decode('ascii')

def bytes_to_hex(b):
    # lowercase hex, no prefix
    return B2A(bytes(b))

def hex_to_bytes(h):
    # strict: even length, hex digits only
    try:
        return bytes.fromhex(h)
    except (ValueError, TypeError):
        raise InvalidParameter("Expected a hex string")

def force_bytes(foo):
    # convert strings to bytes where needed
    return foo.encode('utf-8') if isinstance(foo, str) else foo

def secure_wipe(buf):
    # Zero a mutable buffer in place (bytearray or writable memoryview).
    # - immutable bytes cannot be wiped; keep secrets in bytearray
    if buf is None:
        return
    if isinstance(buf, memoryview):
        buf = buf.cast('B')
    for i in range(len(buf)):
        buf[i] = 0

def secure_wipe_words(words):
    # blank every word of a mnemonic list, then empty the list
    if words is None:
        return
    for i in range(len(words)):
        words[i] = ''
    words.clear()

def b64url_encode(data):
    # RFC-4648 URL-safe alphabet, padding removed
    return base64.urlsafe_b64encode(bytes(data)).rstrip(b'=').decode('ascii')

def b64url_decode(text):
    # reverse of above: restore padding to a multiple of 4
    # - raises binascii.Error on garbage
    text = text + '=' * (-len(text) % 4)
    return base64.urlsafe_b64decode(text.encode('ascii'))

def path_component_in_range(num: int) -> bool:
    # cannot be less than 0
    # cannot be more than (2 ** 31) - 1
    if 0 <= num < HARDENED:
        return True
    return False

def path2str(path):
    # take numeric path (list of numbers) and convert to human form
    # - standardizing on "m/44h" style
    return '/'.join(['m'] + [str(i & ~HARDENED)+('h' if i&HARDENED else '') for i in path])

def str2path(path):
    # normalize notation and return numbers, all must be hardened
    rv = []

    for i in path.split('/'):
        if i == 'm':
            continue
        if not i:
            # trailing or duplicated slashes
            continue

        if i[-1] not in "'phHP":
            raise InvalidParameter(f"Only hardened derivation is supported: {i}")

        if len(i) < 2:
            raise InvalidParameter(f"Malformed bip32 path component: {i}")

        try:
            num = int(i[:-1], 0)
        except ValueError:
            raise InvalidParameter(f"Malformed bip32 path component: {i}")

        if not path_component_in_range(num):
            raise InvalidParameter(f"Hardened path component out of range: {i}")

        rv.append(num | HARDENED)

    return rv

# predicate for numeric paths
all_hardened = lambda path: all(bool(i & HARDENED) for i in path)

# EOF
