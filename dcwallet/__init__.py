#
# (c) Copyright 2021 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#

__version__ = '1.0.0'

__all__ = [ 'bip39', 'bip32', 'keypath', 'keys', 'did', 'encryption', 'wallet',
            'exceptions', 'constants', 'utils' ]

# making and recovering wallets
from dcwallet.wallet import generate_new_wallet, generate_wallet_from_mnemonic, recover_did_wallet
from dcwallet.wallet import rotate_signing_key, Wallet, KeyPair

# DID strings
from dcwallet.did import generate_did_identifier, parse_did, extract_public_key_from_did

# at-rest encryption of wallet secrets
from dcwallet.encryption import encrypt_wallet, decrypt_wallet, derive_keys_from_master_key
