#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# BIP-39 English wordlist.
#
# - loaded once, at import time, into a tuple: it never changes after that
# - order is critical: index of each word is the 11-bit value it encodes
#
import os

from .constants import WORDLIST_SIZE

WORDLIST_FILE = os.path.join(os.path.dirname(__file__), 'english.txt')

def _read_wordlist(fname=WORDLIST_FILE):
    with open(fname, 'rt', encoding='utf-8') as fd:
        words = tuple(ln.strip() for ln in fd if ln.strip())

    if len(words) != WORDLIST_SIZE:
        raise RuntimeError(f"Wordlist has {len(words)} words, expected {WORDLIST_SIZE}")

    return words

_WORDS = _read_wordlist()
_INDEX = {w: n for n, w in enumerate(_WORDS)}

def load_wordlist():
    # the full list, as an immutable tuple
    return _WORDS

def word_index(word):
    # position of word in list, or None if it is not a BIP-39 word
    return _INDEX.get(word)

def is_bip39_word(word):
    return word in _INDEX

# EOF
