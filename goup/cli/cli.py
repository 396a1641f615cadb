"""Command-line interface for goup."""
import argparse
import sys
from typing import List, Optional

from .. import constants
from ..core.version import get_version
from ..utils.exceptions import GoupError, is_transient
from .commands import config as config_commands
from .commands import install as install_commands

def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(prog="goup", description="Download and install Go toolchains")
    parser.add_argument('-V', '--version', action='version', version=f'goup {get_version()}')
    subparsers = parser.add_subparsers(dest='command', required=False)

    # Install command
    install_parser = subparsers.add_parser('install', help='Download and install Go')
    install_parser.add_argument('--dir', help=f'Install directory (default: ${constants.INSTALL_DIR_ENV} or ~/.go)')
    install_parser.add_argument('--url', help='Download the toolchain zip from this URL')
    install_parser.add_argument('--toolchain', help='Toolchain version to install, e.g. go1.21.0beta1')
    install_parser.add_argument('--timeout', type=int, help='Download timeout in seconds')
    install_parser.add_argument('--force', action='store_true',
                                help='Reinstall even if Go is already installed')
    install_parser.add_argument('--fetch-disabled', action='store_true',
                                help='Report missing archives as not fetched from origin')
    install_parser.add_argument('--no-check', action='store_true',
                                help="Do not run 'go version' after installing")
    install_parser.add_argument('--use', metavar='TOOLCHAIN',
                                help="Run 'go toolchain use TOOLCHAIN' after installing")
    install_parser.add_argument('-q', '--quiet', action='store_true', help='Only print errors')
    install_parser.set_defaults(func=install_commands.install_command)

    # Where command
    where_parser = subparsers.add_parser('where', help='Print the install directory')
    where_parser.set_defaults(func=install_commands.where_command)

    # Config commands
    config_parser = subparsers.add_parser('config', help='Global configuration commands',
                                          description="Global keys: " + ", ".join(constants.DEFAULT_CONFIG.keys()))
    config_subparsers = config_parser.add_subparsers(dest='config_command')

    config_list = config_subparsers.add_parser('list', help='List global config')
    config_list.set_defaults(func=config_commands.config_list_command)

    config_get = config_subparsers.add_parser('get', help='Get a global config value')
    config_get.add_argument('key', help='Config key')
    config_get.set_defaults(func=config_commands.config_get_command)

    config_set = config_subparsers.add_parser('set', help='Set a global config value')
    config_set.add_argument('key', help='Config key')
    config_set.add_argument('value', help='Config value')
    config_set.set_defaults(func=config_commands.config_set_command)

    return parser

def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.
    
    Args:
        args: Command line arguments, if None uses sys.argv[1:]
        
    Returns:
        int: Exit code
    """
    if args is None:
        args = sys.argv[1:]

    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not hasattr(parsed_args, 'func'):
        parser.print_help()
        return 1

    try:
        parsed_args.func(parsed_args)
        return 0
    except GoupError as e:
        print(f"Error: {e}", file=sys.stderr)
        if is_transient(e):
            print("This failure is transient; retrying may succeed.", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

if __name__ == '__main__':
    sys.exit(main())
