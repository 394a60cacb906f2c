#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# Wrappers for our choice of crypto libraries. AKA API Cleanup
#
# My standards:
# - pubkeys: 33 bytes compressed, unless 65 bytes uncompressed asked for
# - private key: 32 bytes
# - signature: 64 bytes, compact (r || s)
# - no DER, no PEM, no other serializations leak out of here
# - message digests (for sig/verify) are already digested
# - ECDSA verify returns bool, doesn't raise exception
#
# - secp256k1 work is done by "coincurve" <https://ofek.dev/coincurve/api/>
# - symmetric work (AES, HKDF) by "cryptography"
# - RIPEMD160 (key fingerprints) by "pycryptodome"
#
import hmac
import hashlib

from Crypto.Hash import RIPEMD160
from coincurve import PrivateKey, PublicKey
from coincurve.ecdsa import deserialize_compact, serialize_compact, der_to_cdata, cdata_to_der
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

__all__ = [ 'sha256s', 'hash160', 'hmac_sha512', 'hmac_sha256', 'pbkdf2_sha512',
            'aes_ctr', 'hkdf_sha256', 'consttime_equal',
            'CT_priv_to_pubkey', 'CT_sign', 'CT_sig_verify' ]

def sha256s(msg):
    # single-shot SHA256
    return hashlib.sha256(msg).digest()

def hash160(x):
    # classic bitcoin nested hashes
    # - RIPEMD160 from pycryptodome: hashlib only has it when OpenSSL does
    return RIPEMD160.new(sha256s(x)).digest()

def hmac_sha512(key, msg):
    return hmac.new(key, msg, hashlib.sha512).digest()

def hmac_sha256(key, msg):
    return hmac.new(key, msg, hashlib.sha256).digest()

def pbkdf2_sha512(password, salt, rounds, length):
    return hashlib.pbkdf2_hmac('sha512', password, salt, rounds, dklen=length)

def aes_ctr(key, iv, data):
    # AES in CTR mode: same call to encrypt and decrypt
    # - key size picks AES-128/192/256
    # - iv is the full 16-byte initial counter block
    enc = Cipher(algorithms.AES(bytes(key)), modes.CTR(bytes(iv))).encryptor()
    return enc.update(bytes(data)) + enc.finalize()

def hkdf_sha256(secret, info, length=32):
    # RFC-5869 with no salt (same as a hash-length string of zeros)
    return HKDF(algorithm=hashes.SHA256(), length=length, salt=None, info=info).derive(bytes(secret))

def consttime_equal(a, b):
    # compare two MAC values without an early exit
    return hmac.compare_digest(bytes(a), bytes(b))

def CT_priv_to_pubkey(priv, compressed=True):
    # return serialized pubkey: 33 bytes compressed, or 65 bytes
    # - raises ValueError for zero or out-of-range private keys
    return PublicKey.from_secret(bytes(priv)).format(compressed=compressed)

def CT_sign(privkey, msg_digest):
    # returns 64-byte sig
    assert len(msg_digest) == 32
    der = PrivateKey(bytes(privkey)).sign(msg_digest, hasher=None)
    return serialize_compact(der_to_cdata(der))

def CT_sig_verify(pub, msg_digest, sig):
    # returns True or False
    if len(sig) != 64 or len(msg_digest) != 32:
        return False
    try:
        der = cdata_to_der(deserialize_compact(sig))
        return PublicKey(bytes(pub)).verify(der, msg_digest, hasher=None)
    except ValueError:
        return False

# EOF
