#!/usr/bin/env python
#
# (c) Copyright 2021 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# To use this, install with:
#
#   pip install --editable .
#
# That will create the command "dcwallet" in your path.
#
#
import click, sys, json
from functools import wraps
from getpass import getpass

from dcwallet.constants import *
from dcwallet.exceptions import WalletError
from dcwallet.bip39 import validate_mnemonic, normalize_mnemonic
from dcwallet.did import parse_did, extract_public_key_from_did
from dcwallet.encryption import encrypt_wallet, decrypt_wallet, derive_keys_from_master_key
from dcwallet.keypath import signing_key_path, did_key_path
from dcwallet.utils import B2A, path2str, hex_to_bytes, secure_wipe, secure_wipe_words
from dcwallet import wallet as wallet_mod
from dcwallet import __version__

# dict of options that apply to all commands
global global_opts
global_opts = dict()

# Cleanup display (supress traceback) for user-feedback exceptions
_sys_excepthook = sys.excepthook
def my_hook(ty, val, tb):
    if issubclass(ty, WalletError):
        print("FATAL: %s" % val, file=sys.stderr)
    else:
        return _sys_excepthook(ty, val, tb)
sys.excepthook=my_hook

def fail(msg):
    # show message and stop
    click.echo(f"FAILURE: {msg}", err=True)
    sys.exit(1)

def words_to_bits(num_words):
    # 12 => 128 ... 24 => 256
    return num_words * 32 // 3

def get_words(words, prompt="mnemonic words"):
    # words from the command line, or ask for them (not echoed)
    if words:
        words = normalize_mnemonic(' '.join(words))
    else:
        words = normalize_mnemonic(getpass(f"Enter {prompt}: "))

    if not validate_mnemonic(words):
        fail("Mnemonic is not valid: check word count, spelling and order.")

    return words

def get_master_key(hex_key):
    if not hex_key:
        hex_key = getpass("Enter master key (hex): ")
    try:
        return bytearray(hex_to_bytes(hex_key.strip()))
    except ValueError:
        fail("Master key must be hex")

def show_wallet(w, as_json=False, secrets=False):
    # print wallet details for humans, or as JSON
    if as_json:
        click.echo(json.dumps(w.to_dict(include_secrets=secrets), indent=2))
        return

    if secrets:
        click.echo(f"Mnemonic: {' '.join(w.mnemonic)}")
        click.echo()

    click.echo(f"DID: {w.did}")
    click.echo(f"DID key path: {path2str(w.did_key.path)}")
    click.echo(f"DID public key: {w.did_key.public_key_hex}")
    click.echo(f"Signing key path: {path2str(w.signing_key.path)}")
    click.echo(f"Signing public key: {w.signing_key.public_key_hex}")

    if secrets:
        click.echo(f"Signing private key: {B2A(w.signing_key.private_key)}")

def display_errors(f):
    # clean-up display of errors from library
    @wraps(f)
    def wrapper(*args, **kws):
        try:
            return f(*args, **kws)
        except WalletError as exc:
            fail(str(exc))
    return wrapper

# Accept any prefix of a command name.
#
# from <https://click.palletsprojects.com/en/8.0.x/advanced/?#command-aliases>
class AliasedGroup(click.Group):
    def get_command(self, ctx, cmd_name):
        rv = click.Group.get_command(self, ctx, cmd_name)
        if rv is not None:
            return rv
        matches = [x for x in self.list_commands(ctx)
                   if x.startswith(cmd_name)]
        if not matches:
            return None
        elif len(matches) == 1:
            return click.Group.get_command(self, ctx, matches[0])
        ctx.fail(f"Abiguous command. Pick one of: {' | '.join(sorted(matches))}")

    def resolve_command(self, ctx, args):
        # always return the full command name
        _, cmd, args = super().resolve_command(ctx, args)
        return cmd.name, cmd, args


entity_option = click.option('--entity', '-e', type=click.Choice(ENTITY_TYPES), default=ENTITY_INSTITUTION,
                    help="DID entity type: u=user, i=institution")
index_option = click.option('--index', '-n', type=click.IntRange(min=0, max=HARDENED-1), default=0,
                    help="Address index of signing key (rotate by changing this)")
passphrase_option = click.option('--passphrase', '-p', is_flag=True,
                    help="Prompt for optional BIP-39 passphrase")
json_option = click.option('--json', '-j', 'as_json', is_flag=True, help="Output as JSON")

def get_passphrase(ask):
    return getpass("BIP-39 passphrase: ") if ask else ''

#
# Options we want for all commands
#
@click.group(cls=AliasedGroup)
@click.option('--verbose', '-v', is_flag=True,
                    help="Show derivation details (public values only) on stderr.")
@click.option('--pdb', is_flag=True,
                    help="Prepare patient for surgery to remove bugs.")
@click.version_option(version=__version__)
def main(**kws):
    '''
    Make and recover DID wallets: BIP-39 words, hardened BIP-32 keys, did:dcert identifiers.

    You can use "rec" for "recover", or "rot" for "rotate": any distinct prefix works.
    '''
    # implement PDB option here
    if kws.pop('pdb', False):
        import pdb, sys
        def doit(ex_cls, ex, tb):
            pdb.pm()
        sys.excepthook = doit

    wallet_mod.VERBOSE = bool(kws.get('verbose'))

    # global options, mostly not considered here
    global global_opts
    global_opts.update(kws)


@main.command('new')
@click.option('--words', '-w', 'num_words', type=click.Choice(['12', '15', '18', '21', '24']),
                    default='24', help="Number of words (default: 24)")
@entity_option
@index_option
@passphrase_option
@json_option
@display_errors
def new_wallet(num_words, entity, index, passphrase, as_json):
    '''Pick new random words and show the resulting DID and keys.

    Write the words down! They are the only backup.
    '''
    pw = get_passphrase(passphrase)
    w = wallet_mod.generate_new_wallet(words_to_bits(int(num_words)), entity, pw, index)
    try:
        show_wallet(w, as_json=as_json, secrets=True)
    finally:
        w.wipe()

@main.command('recover')
@click.argument('words', nargs=-1)
@entity_option
@index_option
@passphrase_option
@json_option
@click.option('--secrets', '-s', is_flag=True, help="Also show private values")
@display_errors
def recover_wallet(words, entity, index, passphrase, as_json, secrets):
    '''Rebuild DID and keys from existing words (prompts if not given).'''
    words = get_words(words)
    pw = get_passphrase(passphrase)

    w = wallet_mod.generate_wallet_from_mnemonic(words, entity, pw, index)
    secure_wipe_words(words)
    try:
        show_wallet(w, as_json=as_json, secrets=secrets)
    finally:
        w.wipe()

@main.command('rotate')
@click.argument('words', nargs=-1)
@click.option('--index', '-n', type=click.IntRange(min=0, max=HARDENED-1), required=True,
                    help="New address index for signing key")
@entity_option
@passphrase_option
@display_errors
def rotate_key(words, index, entity, passphrase):
    '''Show the signing key at a new index. The DID stays the same.'''
    words = get_words(words)
    pw = get_passphrase(passphrase)

    w = wallet_mod.generate_wallet_from_mnemonic(words, entity, pw, 0)
    secure_wipe_words(words)
    try:
        w2 = wallet_mod.rotate_signing_key(w, index)
    except WalletError:
        w.wipe()
        raise

    try:
        if w2.did != w.did:
            raise WalletError("DID changed during rotation")

        click.echo(f"DID: {w2.did}  (unchanged)")
        click.echo(f"Old signing key {path2str(w.signing_key.path)}: {w.signing_key.public_key_hex}")
        click.echo(f"New signing key {path2str(w2.signing_key.path)}: {w2.signing_key.public_key_hex}")
    finally:
        w.wipe()
        w2.wipe()

@main.command('check')
@click.argument('words', nargs=-1)
def check_words(words):
    '''Check that words are a valid BIP-39 mnemonic (checksum too).'''
    if words:
        words = normalize_mnemonic(' '.join(words))
    else:
        words = normalize_mnemonic(getpass("Enter mnemonic words: "))

    ok = validate_mnemonic(words)
    n = len(words)
    secure_wipe_words(words)

    if not ok:
        fail(f"Not a valid mnemonic ({n} words)")

    click.echo(f"Valid {n}-word mnemonic")

@main.command('did')
@click.argument('did')
@json_option
def show_did(did, as_json):
    '''Parse a DID and show the public key inside it.'''
    parsed = parse_did(did)
    pubkey = extract_public_key_from_did(did)

    if not parsed.is_valid or pubkey is None:
        fail(f"Not a valid did:{DID_METHOD} identifier")

    rv = dict(method=parsed.method,
              entity_type=parsed.entity_type,
              identifier=parsed.identifier,
              public_key=B2A(pubkey))

    if as_json:
        click.echo(json.dumps(rv, indent=2))
    else:
        for k, v in rv.items():
            click.echo('%s: %s' % (k, v))

@main.command('path')
@index_option
def show_paths(index):
    '''Show the derivation paths used for signing and DID keys.'''
    click.echo(f"Signing key: {path2str(signing_key_path(index))}")
    click.echo(f"DID key: {path2str(did_key_path())}")

@main.command('encrypt')
@click.option('--master-key', '-k', default=None, metavar="HEX",
                    help="Master secret (hex); prompts if not given")
@click.argument('infile', type=click.File('rt'), default='-')
@display_errors
def encrypt_cmd(master_key, infile):
    '''Encrypt text (from file or stdin) into a wallet blob (hex).'''
    mk = get_master_key(master_key)
    keys = derive_keys_from_master_key(mk)
    secure_wipe(mk)

    try:
        click.echo(encrypt_wallet(infile.read(), keys))
    finally:
        keys.wipe()

@main.command('decrypt')
@click.option('--master-key', '-k', default=None, metavar="HEX",
                    help="Master secret (hex); prompts if not given")
@click.argument('blob')
@display_errors
def decrypt_cmd(master_key, blob):
    '''Check and decrypt a wallet blob made by "encrypt".'''
    mk = get_master_key(master_key)
    keys = derive_keys_from_master_key(mk)
    secure_wipe(mk)

    try:
        click.echo(decrypt_wallet(blob.strip(), keys), nl=False)
    finally:
        keys.wipe()

# EOF
