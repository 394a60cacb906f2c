import pytest

# the standard BIP-39 test mnemonic, all zero entropy
ABANDON_WORDS = ['abandon'] * 11 + ['about']

# PBKDF2 result for ABANDON_WORDS, empty passphrase (published BIP-39 value)
ABANDON_SEED = bytes.fromhex(
    '5eb00bbddcf069084889a8ab9155568165f5c453ccb85e70811aaed6f6da5fc1'
    '9a5ac40b389cd370d086206dec8aa6c43daea6690f20ad3d8d48b2d2ce9e38e4')

# keys and DID for ABANDON_SEED
ABANDON_MASTER_KEY = bytes.fromhex('1837c1be8e2995ec11cda2b066151be2cfb48adf9e47b151d46adab3a21cdf67')
ABANDON_MASTER_CHAIN = bytes.fromhex('7923408dadd3c7b56eed15567707ae5e5dca089de972e07f3b860450e2a3b70e')

ABANDON_DID_KEY = bytes.fromhex('4452bdc7c0d723a0d5c5196731fa7f1c69aae53dbfad41e5d73459478bb7b2ad')
ABANDON_DID_CHAIN = bytes.fromhex('442f533eb2a59709190eac9919897aa29d2dc2aae26912f7ad123ff27f68eade')
ABANDON_DID_PUBKEY = bytes.fromhex('03ff91a0ea7bc8966c5f70432d15ae1e855ca293322addbf998a1db8612fc49a21')
ABANDON_DID = 'did:dcert:iA_-RoOp7yJZsX3BDLRWuHoVcopMyKt2_mYoduGEvxJoh'

ABANDON_SIGNING_KEYS = {
    0: bytes.fromhex('93626af626f3f14525f3d3c89e669cb08d6cf298a3294997bf3d40d79f3ac6bf'),
    1: bytes.fromhex('2dd6178690ec9ca6e9637b456ff198a7c0a81f08708393370b99d568c34eedcb'),
}
ABANDON_SIGNING_PUBKEYS = {
    0: bytes.fromhex('020acb7aaa06df82b6973696639be577cdbdbdabea1855ee76c3a6a3bdc6806c1a'),
    1: bytes.fromhex('034cfa7075f32774268bfa3a3ce673411b8f0ab54ea55bed3600e79a0961fb9210'),
}

@pytest.fixture
def abandon_words():
    # fresh list each time: tests may wipe it
    return list(ABANDON_WORDS)

@pytest.fixture
def abandon_seed():
    return bytearray(ABANDON_SEED)

@pytest.fixture
def random_keys():
    # random encryption/MAC key pair
    import os
    from dcwallet.encryption import WalletKeys
    return WalletKeys(os.urandom(32), os.urandom(32))

# EOF
