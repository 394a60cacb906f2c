#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# bip39.py
#
# Mnemonic phrases: entropy <=> words, checksum validation, and seed stretching.
#
# Word lists returned here are plain Python lists so the caller can blank them
# (see utils.secure_wipe_words) once done. Seeds are bytearrays for the same reason.
#
import os, unicodedata
from typing import List, Sequence

from .constants import *
from .compat import sha256s, pbkdf2_sha512
from .exceptions import InvalidParameter, InvalidMnemonic
from .utils import secure_wipe
from .wordlist import load_wordlist, word_index


def _checksum_bits(entropy: bytes) -> int:
    # top ENT/32 bits of SHA256(entropy), as an integer
    cs = len(entropy) * 8 // 32
    return sha256s(bytes(entropy))[0] >> (8 - cs)

def entropy_to_mnemonic(entropy: bytes) -> List[str]:
    """
    Encode raw entropy as mnemonic words.

    Appends ENT/32 bits of checksum (from SHA256) to the entropy, then
    splits the result into 11-bit groups, each one an index into the wordlist.

    :param entropy: 16, 20, 24, 28 or 32 bytes
    :return: list of 12 to 24 words
    """
    ent = len(entropy) * 8
    if ent not in VALID_ENTROPY_BITS:
        raise InvalidParameter(f"Entropy must be one of {VALID_ENTROPY_BITS} bits, got {ent}")

    cs = ent // 32
    bits = (int.from_bytes(bytes(entropy), 'big') << cs) | _checksum_bits(entropy)
    count = (ent + cs) // BITS_PER_WORD

    wordlist = load_wordlist()
    mask = (1 << BITS_PER_WORD) - 1

    return [wordlist[(bits >> (BITS_PER_WORD * (count - 1 - n))) & mask] for n in range(count)]

def mnemonic_to_entropy(words: Sequence[str]) -> bytearray:
    """
    Decode words back into entropy, checking everything along the way.

    :param words: list of mnemonic words
    :return: entropy bytes
    :raises InvalidMnemonic: wrong word count, unknown word, or bad checksum
    """
    if isinstance(words, (str, bytes)) or not hasattr(words, '__len__'):
        raise InvalidMnemonic("Mnemonic must be a list of words")

    count = len(words)
    if count not in VALID_WORD_COUNTS:
        raise InvalidMnemonic(f"Mnemonic must have {VALID_WORD_COUNTS} words, got {count}")

    bits = 0
    for w in words:
        idx = word_index(w) if isinstance(w, str) else None
        if idx is None:
            raise InvalidMnemonic("Mnemonic contains a word not in the BIP-39 wordlist")
        bits = (bits << BITS_PER_WORD) | idx

    total = count * BITS_PER_WORD
    ent = total * 32 // 33
    cs = total - ent

    entropy = bytearray((bits >> cs).to_bytes(ent // 8, 'big'))
    if (bits & ((1 << cs) - 1)) != _checksum_bits(entropy):
        secure_wipe(entropy)
        raise InvalidMnemonic("Mnemonic checksum does not match")

    return entropy

def generate_mnemonic(entropy_bits: int = ENTROPY_BITS_24_WORDS) -> List[str]:
    """
    Pick a new random mnemonic.

    :param entropy_bits: 128, 160, 192, 224 or 256 (for 12 .. 24 words)
    :return: list of words
    """
    if not isinstance(entropy_bits, int) or isinstance(entropy_bits, bool) \
            or entropy_bits not in VALID_ENTROPY_BITS:
        raise InvalidParameter(f"Invalid entropy bits. Must be one of: {VALID_ENTROPY_BITS}")

    entropy = bytearray(os.urandom(entropy_bits // 8))
    try:
        return entropy_to_mnemonic(entropy)
    finally:
        secure_wipe(entropy)

def validate_mnemonic(words: Sequence[str]) -> bool:
    # True if word count, wordlist membership and checksum are all good; never raises
    try:
        entropy = mnemonic_to_entropy(words)
    except InvalidMnemonic:
        return False

    secure_wipe(entropy)
    return True

def normalize_mnemonic(text: str) -> List[str]:
    # split a phrase as typed by a human: any whitespace, any case
    return unicodedata.normalize('NFKD', text).lower().split()

def mnemonic_to_seed(words: Sequence[str], passphrase: str = '') -> bytearray:
    """
    Stretch mnemonic into the 64-byte BIP-39 seed.

    PBKDF2-HMAC-SHA512, 2048 rounds, password is the words joined by
    single spaces, salt is "mnemonic" + passphrase. Does not check the
    mnemonic checksum: that's the caller's job.

    :param words: list of mnemonic words
    :param passphrase: optional extra passphrase (default='')
    :return: 64 byte seed
    """
    if isinstance(words, (str, bytes)):
        # joining a phrase would join its letters
        raise InvalidParameter("Mnemonic must be a list of words, not a phrase")

    mnemonic = ' '.join(words).encode('utf-8')
    salt = ('mnemonic' + passphrase).encode('utf-8')

    return bytearray(pbkdf2_sha512(mnemonic, salt, PBKDF2_ROUNDS, SEED_LENGTH))

# EOF
