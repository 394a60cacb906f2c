#
# (c) Copyright 2021 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# Crypto library wrappers, and public keys / signatures built on them.
#
import os
import pytest

from dcwallet.compat import *
from dcwallet.exceptions import InvalidParameter, InvalidKey
from dcwallet.keys import private_key_to_public_key, get_public_key_formats, sign_digest, verify_digest

from conftest import ABANDON_SEED, ABANDON_WORDS, ABANDON_DID_KEY, ABANDON_DID_PUBKEY

def test_wrap():
    # crypto lib wrappers need to function

    assert sha256s(b'abc') == \
            bytes.fromhex('ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad')

    assert hash160(b'abc') == \
            b'\xbb\x1b\xe9\x8c\x14$D\xd7\xa5j\xa3\x98\x1c9B\xa9x\xe4\xdc3'

    # RFC-4231 test case 2
    assert hmac_sha256(b'Jefe', b'what do ya want for nothing?') == \
            bytes.fromhex('5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843')

    got = pbkdf2_sha512(' '.join(ABANDON_WORDS).encode(), b'mnemonic', 2048, 64)
    assert got == ABANDON_SEED

    pk = os.urandom(32)
    pub = CT_priv_to_pubkey(pk)
    assert len(pub) == 33
    assert CT_priv_to_pubkey(pk, compressed=False)[1:33] == pub[1:]

    md = bytes(32)
    s1 = CT_sign(pk, md)
    assert len(s1) == 64
    assert CT_sig_verify(pub, md, s1)
    assert not CT_sig_verify(pub, b'\x01' * 32, s1)
    assert not CT_sig_verify(pub, md, s1[:-1])

def test_aes_ctr():
    # NIST SP 800-38A, F.5.5 CTR-AES256.Encrypt, first block
    key = bytes.fromhex('603deb1015ca71be2b73aef0857d77811f352c073b6108d72d9810a30914dff4')
    iv = bytes.fromhex('f0f1f2f3f4f5f6f7f8f9fafbfcfdfeff')
    pt = bytes.fromhex('6bc1bee22e409f96e93d7e117393172a')
    ct = aes_ctr(key, iv, pt)
    assert ct == bytes.fromhex('601ec313775789a5b7a7f504bbf3d228')
    assert aes_ctr(key, iv, ct) == pt

def test_hkdf():
    out = hkdf_sha256(bytes(range(32)), b'wallet-encryption-v1')
    assert out.hex() == '222f6977639acf3fee3e82400b385ecbba8a4419897e5499ac0fe9faeb25e5a0'
    assert len(hkdf_sha256(b'x' * 16, b'', 64)) == 64

def test_consttime():
    assert consttime_equal(b'abc', bytearray(b'abc'))
    assert not consttime_equal(b'abc', b'abd')
    assert not consttime_equal(b'abc', b'ab')

def test_pubkey_formats():
    one = (1).to_bytes(32, 'big')
    f = get_public_key_formats(one)
    assert f['compressed_hex'] == '0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798'
    assert f['uncompressed_hex'] == \
        '0479be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798' \
        '483ada7726a3c4655da4fbfc0e1108a8fd17b448a68554199c47d08ffb10d4b8'
    assert f['compressed'] == bytes.fromhex(f['compressed_hex'])
    assert len(f['uncompressed']) == 65

    assert private_key_to_public_key(ABANDON_DID_KEY) == ABANDON_DID_PUBKEY
    assert private_key_to_public_key(bytearray(ABANDON_DID_KEY)) == ABANDON_DID_PUBKEY

def test_pubkey_errors():
    with pytest.raises(InvalidParameter):
        private_key_to_public_key(bytes(31))
    with pytest.raises(InvalidParameter):
        private_key_to_public_key(None)
    with pytest.raises(InvalidKey):
        private_key_to_public_key(bytes(32))
    with pytest.raises(InvalidKey):
        private_key_to_public_key(b'\xff' * 32)

def test_sign_verify():
    md = sha256s(b'hello')
    sig = sign_digest(ABANDON_DID_KEY, md)
    assert verify_digest(ABANDON_DID_PUBKEY, md, sig)

    # RFC-6979 nonces: same every time
    assert sign_digest(ABANDON_DID_KEY, md) == sig

    assert not verify_digest(ABANDON_DID_PUBKEY, sha256s(b'other'), sig)
    assert not verify_digest(None, md, sig)
    assert not verify_digest(ABANDON_DID_PUBKEY, md, b'')

    with pytest.raises(InvalidParameter):
        sign_digest(ABANDON_DID_KEY, b'short')
    with pytest.raises(InvalidParameter):
        sign_digest(bytes(5), md)

def test_vs_wally():
    # cross check against libwally, where installed
    wally = pytest.importorskip('wallycore')

    assert wally.bip39_mnemonic_to_seed512(' '.join(ABANDON_WORDS), None) == ABANDON_SEED

    pub = wally.ec_public_key_from_private_key(ABANDON_DID_KEY)
    assert pub == ABANDON_DID_PUBKEY

# EOF
