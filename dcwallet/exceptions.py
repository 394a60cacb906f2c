#
# (c) Copyright 2021 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# Exceptions
#

class WalletError(RuntimeError):
    pass

class InvalidParameter(WalletError, ValueError):
    # wrong sizes, out of range values, bad entity type, non-hardened index
    pass

class InvalidKey(WalletError):
    # derived private key is zero or not below the curve order
    pass

class InvalidMnemonic(WalletError):
    # bad word count, unknown word or checksum mismatch
    pass

class IntegrityError(WalletError):
    # MAC on encrypted wallet did not verify; nothing was decrypted
    pass

# EOF
