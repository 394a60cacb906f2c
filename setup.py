#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
#
# DID wallet: BIP-39 words, hardened key tree, did:dcert identifiers
#

import re

# read version without importing the package (needs deps not yet installed)
with open("dcwallet/__init__.py", "r") as fh:
    __version__ = re.search(r"__version__ = '([^']+)'", fh.read()).group(1)

# To use this command to install and yet be able to edit the code (here). Great for dev:
#
#   pip install --editable .
#
# with test dependencies
#
#   pip install --editable '.[test]'
#
#
from setuptools import setup

# these minimum versions are tested, some earlier values would probably work too.
requirements = [
    'coincurve>=18.0.0',
    'cryptography>=41.0.0',
    'base58>=2.1.1',
    'pycryptodome>=3.15.0',
    'click>=8.0.3',
]

test_requirements = [
    'pytest',
]

# only for developers playing with crypto libraries - cross library comparisons
test_plus_requirements = [
    'wallycore>=0.8.2',
] + test_requirements

with open("README.md", "r") as fh:
    long_description = fh.read()

setup(
    name='dcert-did-wallet',
    version=__version__,
    packages=[ 'dcwallet' ],
    package_data={ 'dcwallet': [ 'english.txt' ] },
    python_requires='>=3.8',
    install_requires=requirements,
    extras_require={
        'test': test_requirements,
        'test_plus': test_plus_requirements,
    },
    description="Hierarchical deterministic keys and did:dcert identifiers from BIP-39 words",
    long_description=long_description,
    long_description_content_type="text/markdown",
    entry_points='''
        [console_scripts]
        dcwallet=dcwallet.cli:main
    ''',
    classifiers=[
        'Operating System :: POSIX :: Linux',
        'Operating System :: Microsoft :: Windows',
        'Operating System :: MacOS :: MacOS X',
    ],
)
