"""Install command implementation."""
import signal
import sys
import threading
from contextlib import contextmanager
from pathlib import Path

from ... import constants
from ...core import config, install, platform

@contextmanager
def _cancel_on_interrupt(cancel_event: threading.Event):
    """Turn the first Ctrl-C into a download cancellation."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def handler(signum, frame):
        cancel_event.set()
        # Later interrupts behave as usual
        signal.signal(signal.SIGINT, previous)

    previous = signal.signal(signal.SIGINT, handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)

def _resolve_destination(args, global_config) -> Path:
    if args.dir:
        return Path(args.dir).expanduser().absolute()
    return config.resolve_install_dir(global_config)

def where_command(args) -> None:
    """Print the directory Go is installed into."""
    print(config.resolve_install_dir())

def install_command(args) -> None:
    """Download and install a Go toolchain.
    
    Args:
        args: Command line arguments
    """
    global_config = config.load_global_config()
    quiet = args.quiet

    os_name, arch = platform.get_platform_info()
    dst = _resolve_destination(args, global_config)
    primary = f"bin/{platform.get_go_bin_name()}"
    gobin = install.primary_binary(dst, primary)

    if not quiet:
        print(f"Installing Go for {os_name}/{arch}...")
        print(constants.NOTICE)
        print(f"Go will be installed in {dst}.")

    if install.is_installed(dst, primary) and not args.force:
        if not quiet:
            print(f"{gobin} already exists, skipping download (use --force to reinstall).")
    else:
        uri = args.url or install.toolchain_uri(
            args.toolchain or global_config['toolchain_version'],
            os_name,
            arch,
            global_config['toolchain_base_url']
        )
        if not quiet:
            print(f"Downloading {uri}")

        cancel_event = threading.Event()
        try:
            with _cancel_on_interrupt(cancel_event):
                install.fetch_and_install(
                    uri,
                    dst,
                    cancel_event,
                    timeout=args.timeout or global_config['fetch_timeout'],
                    fetch_disabled=args.fetch_disabled or global_config['fetch_disabled'],
                    primary=primary,
                    quiet=quiet
                )
        except Exception:
            if dst.exists():
                print(f"Installation into {dst} did not complete; the directory may be partially populated.",
                      file=sys.stderr)
            raise

    if not args.no_check:
        install.run_installed(gobin, "version")

    if args.use:
        install.run_installed(gobin, "toolchain", "use", args.use)

    if not quiet:
        print(f"Go is installed in {gobin}. Make sure it is in your PATH.")
