#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# System constants.
#

# our DID method: did:dcert:...
DID_METHOD = 'dcert'

# entity type prefix on the identifier part of the DID
ENTITY_USER = 'u'
ENTITY_INSTITUTION = 'i'
ENTITY_TYPES = (ENTITY_USER, ENTITY_INSTITUTION)

# high bit set in a BIP-32 path component indicating hardened derivation
HARDENED = 0x8000_0000

# BIP-44 style derivation path: m/purpose'/coin_type'/account'/change'/index'
DID_PURPOSE = 44
DID_COIN_TYPE = 1001
DID_ACCOUNT = 0

# "change" level is how we split one seed into two subtrees
# - 0 = external chain: signing keys, rotated by changing the address index
# - 1 = internal chain: the DID identifier key, index is always zero
SIGNING_CHANGE = 0
DID_CHANGE = 1
DID_ADDRESS_INDEX = 0

# BIP-39 entropy sizes (bits) and the matching word counts
ENTROPY_BITS_12_WORDS = 128
ENTROPY_BITS_15_WORDS = 160
ENTROPY_BITS_18_WORDS = 192
ENTROPY_BITS_21_WORDS = 224
ENTROPY_BITS_24_WORDS = 256         # recommended, and our default

VALID_ENTROPY_BITS = (128, 160, 192, 224, 256)
VALID_WORD_COUNTS = (12, 15, 18, 21, 24)

# wordlist is fixed: 2048 entries, 11 bits per word
WORDLIST_SIZE = 2048
BITS_PER_WORD = 11

# BIP-39 seed stretching
PBKDF2_ROUNDS = 2048
SEED_LENGTH = 64

# BIP-32 master key derivation uses this as the HMAC key
BIP32_SEED_KEY = b'Bitcoin seed'

# size of private keys and chain codes
KEY_SIZE = 32

# order of the secp256k1 group
SECP256K1_ORDER = 0xFFFFFFFF_FFFFFFFF_FFFFFFFF_FFFFFFFE_BAAEDCE6_AF48A03B_BFD25E8C_D0364141

# serialized public keys
COMPRESSED_PUBKEY_SIZE = 33
UNCOMPRESSED_PUBKEY_SIZE = 65

# 33 byte compressed pubkey, base64url without padding
DID_BASE64URL_LENGTH = 44

# extended key serialization (BIP-32), mainnet values
XPRV_VERSION = 0x0488ADE4
XPUB_VERSION = 0x0488B21E

# encrypted wallet blob: IV || ciphertext || MAC
IV_SIZE = 16
MAC_SIZE = 32
WALLET_KEY_SIZE = 32

# HKDF info labels: one master secret, two unrelated keys
HKDF_INFO_ENCRYPTION = b'wallet-encryption-v1'
HKDF_INFO_MAC = b'wallet-mac-v1'

# EOF
