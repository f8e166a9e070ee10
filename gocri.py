import argparse
import os
import sys
import logging

from gocri_crypto import (
    __version__,
    GocriError,
    encrypt_files,
    decrypt_files,
    generate_rsa_keys,
    DEFAULT_KEY_SIZE,
)

usage = "Encrypt/Decrypt tool by the RSA encryption for your secret file."

# Default RSA Public Key file path
RSA_default_public_key_path = '~/.ssh/public_rsa.pem'

log = logging.getLogger('gocri')


def _setup_logging(verbosity):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(message)s', stream=sys.stderr)


def _default_public_key():
    path = os.path.expanduser(RSA_default_public_key_path)
    if os.path.exists(path):
        log.info("Using default public key '%s'", path)
        return path
    return None


def build_parser():
    parser = argparse.ArgumentParser(prog='gocri', description=usage)
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-v', '--verbose', action='count', default=0, help='Log progress to stderr (-vv for debug)')

    sub = parser.add_subparsers(dest='command')

    enc = sub.add_parser('encrypt', aliases=['e'], help='Encrypt your files',
                         description='gocri encrypt filename... --key id_rsa.pub --output secret.out')
    enc.add_argument('files', nargs='*', help='Files to bundle and encrypt')
    enc.add_argument('-k', '--key', help=f'Specify your public-key to encrypt, Default:{RSA_default_public_key_path}')
    enc.add_argument('-o', '--output', help='Specify an output filename (stdout when omitted)')

    dec = sub.add_parser('decrypt', aliases=['d'], help="Decrypt gocri's binary file",
                         description='gocri decrypt --key id_rsa filename...')
    dec.add_argument('files', nargs='*', help='Encrypted files to restore')
    dec.add_argument('-k', '--key', help='Specify your private-key to decrypt')
    dec.add_argument('--output-dir', help='Restore files beneath this directory, rejecting absolute or escaping paths')

    gen = sub.add_parser('genkey', help='Generate RSA key pair')
    gen.add_argument('-o', '--output', required=True, help='Output prefix, writes <prefix>_private.pem and <prefix>_public.pem')
    gen.add_argument('--bits', type=int, default=DEFAULT_KEY_SIZE, help=f'RSA key size, Default:{DEFAULT_KEY_SIZE}')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.command == 'genkey' and args.bits < 1024:
        parser.error('--bits must be at least 1024.')

    try:
        if args.command in ('encrypt', 'e'):
            key = args.key or _default_public_key()
            encrypt_files(key, args.files, args.output)
        elif args.command in ('decrypt', 'd'):
            decrypt_files(args.key, args.files, output_dir=args.output_dir)
        elif args.command == 'genkey':
            priv, pub = generate_rsa_keys(args.output, key_size=args.bits)
            log.info("RSA keys saved to '%s' and '%s'", priv, pub)
        else:
            parser.print_help()
    except (GocriError, OSError) as e:
        print(e, file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
