#! /usr/bin/env python3

from .commands import (
    cosigntx,
    enumerate,
    find_device,
    get_client,
    getaccount,
    getversion,
    signtx,
)
from .common import NetworkType
from .errors import (
    handle_errors,
    DEVICE_CONN_ERROR,
    HELP_TEXT,
    MISSING_ARGUMENTS,
    UNKNOWN_ERROR,
)
from .hwwclient import HardwareWalletClient
from . import __version__

import argparse
import logging
import json
import shlex
import sys

from typing import (
    Any,
    Dict,
    IO,
    List,
    NoReturn,
    Optional,
    Union,
)


def enumerate_handler(args: argparse.Namespace) -> List[Dict[str, Any]]:
    return enumerate(allow_emulators=args.allow_emulators)

def getversion_handler(args: argparse.Namespace, client: HardwareWalletClient) -> Dict[str, Union[str, bool]]:
    return getversion(client)

def getaccount_handler(args: argparse.Namespace, client: HardwareWalletClient) -> Dict[str, str]:
    return getaccount(client, path=args.path, account=args.account, display=args.display)

def signtx_handler(args: argparse.Namespace, client: HardwareWalletClient) -> Dict[str, Union[int, str]]:
    return signtx(client, path=args.path, transaction=args.transaction, generation_hash=args.generation_hash, signer_public_key=args.signer_public_key)

def cosigntx_handler(args: argparse.Namespace, client: HardwareWalletClient) -> Dict[str, str]:
    return cosigntx(client, path=args.path, transaction=args.transaction, transaction_hash=args.transaction_hash, signer_public_key=args.signer_public_key)

class SymHWIHelpFormatter(argparse.ArgumentDefaultsHelpFormatter, argparse.RawDescriptionHelpFormatter):
    pass

class SymHWIArgumentParser(argparse.ArgumentParser):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.formatter_class = SymHWIHelpFormatter

    def print_usage(self, file: Optional[IO[str]] = None) -> None:
        if file is None:
            file = sys.stderr
        super().print_usage(file)

    def print_help(self, file: Optional[IO[str]] = None) -> None:
        if file is None:
            file = sys.stderr
        super().print_help(file)
        error = {'error': 'Help text requested', 'code': HELP_TEXT}
        print(json.dumps(error))

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        args = {'prog': self.prog, 'message': message}
        error = {'error': '%(prog)s: error: %(message)s' % args, 'code': MISSING_ARGUMENTS}
        print(json.dumps(error))
        self.exit(2)

def get_parser() -> SymHWIArgumentParser:
    parser = SymHWIArgumentParser(description='Symbol Hardware Wallet Interface, version {}.\nAccess and send commands to the Symbol app of a hardware wallet. Responses are in JSON format.'.format(__version__))
    parser.add_argument('--device-path', '-d', help='Specify the device path of the device to connect to')
    parser.add_argument('--device-type', '-t', help='Specify the type of device that will be connected. If `--device-path` not given, the first device of this type enumerated is used.')
    parser.add_argument('--network', help='Select the Symbol network to work with', type=NetworkType.argparse, choices=list(NetworkType), default=NetworkType.MAIN_NET) # type: ignore
    parser.add_argument('--debug', help='Print debug statements', action='store_true')
    parser.add_argument('--version', action='version', version='%(prog)s {}'.format(__version__))
    parser.add_argument('--stdin', help='Enter commands and arguments via stdin', action='store_true')
    parser.add_argument("--emulators", help="Enable enumeration and detection of device emulators", action="store_true", dest="allow_emulators")

    subparsers = parser.add_subparsers(description='Commands', dest='command')
    # work-around to make subparser required
    subparsers.required = True

    enumerate_parser = subparsers.add_parser('enumerate', help='List all available devices')
    enumerate_parser.set_defaults(func=enumerate_handler)

    getversion_parser = subparsers.add_parser('getversion', help='Get the version of the Symbol app and whether it is supported')
    getversion_parser.set_defaults(func=getversion_handler)

    getaccount_parser = subparsers.add_parser('getaccount', help='Get the public key of an account')
    getaccount_parser.add_argument('--path', help="The derivation path of the account, default follows the Symbol convention, e.g. ``44'/4343'/0'/0'/0'``")
    getaccount_parser.add_argument('--account', help='The account index, used when --path is not given', type=int, default=0)
    getaccount_parser.add_argument('--display', help='Show the address on the device', action='store_true')
    getaccount_parser.set_defaults(func=getaccount_handler)

    signtx_parser = subparsers.add_parser('signtx', help='Sign a serialized transaction')
    signtx_parser.add_argument('path', help='The derivation path of the signing account')
    signtx_parser.add_argument('transaction', help='The serialized transaction, as hex')
    signtx_parser.add_argument('generation_hash', help='The generation hash of the network')
    signtx_parser.add_argument('--signer-public-key', help='The public key of the signing account. Queried from the device if not given.')
    signtx_parser.set_defaults(func=signtx_handler)

    cosigntx_parser = subparsers.add_parser('cosigntx', help='Cosign an announced aggregate transaction')
    cosigntx_parser.add_argument('path', help='The derivation path of the cosigning account')
    cosigntx_parser.add_argument('transaction', help='The serialized aggregate transaction, as hex')
    cosigntx_parser.add_argument('transaction_hash', help='The hash of the aggregate transaction')
    cosigntx_parser.add_argument('--signer-public-key', help='The public key of the cosigning account. Queried from the device if not given.')
    cosigntx_parser.set_defaults(func=cosigntx_handler)

    return parser

def process_commands(cli_args: List[str]) -> Any:
    parser = get_parser()

    if any(arg == '--stdin' for arg in cli_args):
        while True:
            try:
                line = input()
                # Exit loop when we see 2 consecutive newlines (i.e. an empty line)
                if line == '':
                    break
                # Split the line and append it to the cli args
                cli_args.extend(shlex.split(line))
            except EOFError:
                # If we see EOF, stop taking input
                break

    # Parse arguments again for anything entered over stdin
    args = parser.parse_args(cli_args)

    command = args.command
    result: Dict[str, Any] = {}

    # Setup debug logging
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    # List all available hardware wallet devices
    if command == 'enumerate':
        return args.func(args)

    if args.device_type and not args.device_path:
        with handle_errors(result=result, code=DEVICE_CONN_ERROR):
            client = find_device(args.device_type, args.network, args.allow_emulators)
        if 'error' in result:
            return result
        if not client:
            return {'error': 'Could not find device with specified type', 'code': DEVICE_CONN_ERROR}
    elif args.device_path:
        with handle_errors(result=result, code=DEVICE_CONN_ERROR):
            client = get_client(args.device_type or 'ledger', args.device_path, args.network)
        if 'error' in result:
            return result
    else:
        with handle_errors(result=result, code=DEVICE_CONN_ERROR):
            client = find_device(None, args.network, args.allow_emulators)
        if 'error' in result:
            return result
        if not client:
            return {'error': 'No device found, connect one or pass --device-path', 'code': DEVICE_CONN_ERROR}

    if client is None:
        return {"error": "Unable to communicate with device", "code": UNKNOWN_ERROR}

    # Do the commands
    with handle_errors(result=result, debug=args.debug):
        result = args.func(args, client)

    with handle_errors(result=result, debug=args.debug):
        client.close()

    return result

def main() -> None:
    result = process_commands(sys.argv[1:])
    print(json.dumps(result))
