#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# Signing key and DID key: where they come from in the tree.
#
import pytest

from dcwallet.constants import HARDENED
from dcwallet.exceptions import InvalidParameter
from dcwallet.keypath import (account_path, signing_key_path, did_key_path, derive_path,
                              derive_signing_key, derive_did_identifier_key)
from dcwallet.utils import path2str, all_hardened

from conftest import (ABANDON_SEED, ABANDON_MASTER_KEY, ABANDON_DID_KEY, ABANDON_DID_CHAIN,
                      ABANDON_SIGNING_KEYS, ABANDON_SIGNING_PUBKEYS)

def test_paths():
    assert path2str(account_path()) == 'm/44h/1001h/0h'
    assert path2str(signing_key_path()) == 'm/44h/1001h/0h/0h/0h'
    assert path2str(signing_key_path(7)) == 'm/44h/1001h/0h/0h/7h'
    assert path2str(signing_key_path(HARDENED-1)) == 'm/44h/1001h/0h/0h/2147483647h'
    assert path2str(did_key_path()) == 'm/44h/1001h/0h/1h/0h'

    for p in (account_path(), signing_key_path(5), did_key_path()):
        assert all_hardened(p)

@pytest.mark.parametrize('idx', [-1, HARDENED, HARDENED + 5, 1.0, '1', None, False])
def test_bad_address_index(idx):
    with pytest.raises(InvalidParameter):
        signing_key_path(idx)
    with pytest.raises(InvalidParameter):
        derive_signing_key(ABANDON_SEED, idx)

def test_signing_keys():
    for idx in (0, 1):
        k = derive_signing_key(ABANDON_SEED, idx)
        assert k.private_key == ABANDON_SIGNING_KEYS[idx]
        assert k.sec() == ABANDON_SIGNING_PUBKEYS[idx]
        assert list(k.path) == signing_key_path(idx)
        assert k.depth == 5

    k = derive_signing_key(ABANDON_SEED)
    assert k.chain_code.hex() == 'e9efb06d2f2a3d59d0aacfb2eb647607501d1e1580799f8eac01c26b57eb3820'

def test_did_key():
    k = derive_did_identifier_key(ABANDON_SEED)
    assert k.private_key == ABANDON_DID_KEY
    assert k.chain_code == ABANDON_DID_CHAIN
    assert list(k.path) == did_key_path()

def test_separation():
    # DID key is never one of the signing keys
    did = derive_did_identifier_key(ABANDON_SEED)
    seen = set()
    for idx in range(5):
        k = derive_signing_key(ABANDON_SEED, idx)
        assert k.private_key != did.private_key
        seen.add(bytes(k.private_key))
    assert len(seen) == 5

def test_deterministic():
    a = derive_did_identifier_key(ABANDON_SEED)
    b = derive_did_identifier_key(bytearray(ABANDON_SEED))
    assert a == b

    other = bytes(64)
    assert derive_did_identifier_key(other) != a
    assert derive_signing_key(other, 3) == derive_signing_key(other, 3)

def test_derive_path():
    m = derive_path(ABANDON_SEED, [])
    assert m.is_master()
    assert m.private_key == ABANDON_MASTER_KEY

    k = derive_path(ABANDON_SEED, did_key_path())
    assert k.private_key == ABANDON_DID_KEY

    with pytest.raises(InvalidParameter):
        derive_path(ABANDON_SEED, [44])

# EOF
