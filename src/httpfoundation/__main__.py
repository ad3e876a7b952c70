"""
=============================================================================
HTTPFOUNDATION CLI ENTRY POINT
=============================================================================

Normalize a URI from the command line and show its components.

=============================================================================
USAGE
=============================================================================

    # Normalize a URI
    python -m httpfoundation "HTTP://Example.COM:80/a b?x=y"

    # Change components; applied in order scheme, host, port, path,
    # query, fragment, user info
    python -m httpfoundation http://example.com --scheme https --port 8443

    # Machine-readable output
    python -m httpfoundation http://example.com/path --json

=============================================================================
EXIT CODES
=============================================================================

    0   URI printed
    2   invalid URI or component (argparse also uses 2 for bad usage)

=============================================================================
"""

import argparse
import json
import logging
import sys

from . import __version__
from .config import setup_logging
from .errors import InvalidArgumentError
from .http.uri import Uri

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="httpfoundation",
        description="Normalize a URI per RFC 3986 and print its components",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m httpfoundation "HTTP://Example.COM:80/a b"     # Normalize
  python -m httpfoundation //example.com --scheme https    # Add a scheme
  python -m httpfoundation http://example.com --json       # JSON output
        """
    )

    parser.add_argument("uri", help="URI reference to normalize")

    # ─────────────────────────────────────────────────────────────────────
    # COMPONENT OVERRIDES
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument("--scheme", help="Replace the scheme")
    parser.add_argument("--host", "-H", help="Replace the host")
    parser.add_argument("--port", "-p", help="Replace the port (\"\" removes it)")
    parser.add_argument("--path", help="Replace the path")
    parser.add_argument("--query", "-q", help="Replace the query (without '?')")
    parser.add_argument("--fragment", "-f", help="Replace the fragment (without '#')")
    parser.add_argument("--user", "-u", help="Replace the user (\"\" removes the user info)")
    parser.add_argument("--password", help="Password to go with --user")

    # ─────────────────────────────────────────────────────────────────────
    # OUTPUT
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument("--json", action="store_true", help="Print components as JSON")

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: from HTTPFOUNDATION_LOG_LEVEL or WARNING)"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"httpfoundation {__version__}"
    )

    return parser


def apply_overrides(uri: Uri, args: argparse.Namespace) -> Uri:
    """Apply the component options to uri, in a fixed order."""
    if args.scheme is not None:
        uri = uri.with_scheme(args.scheme)
    if args.host is not None:
        uri = uri.with_host(args.host)
    if args.port is not None:
        uri = uri.with_port(args.port or None)
    if args.path is not None:
        uri = uri.with_path(args.path)
    if args.query is not None:
        uri = uri.with_query(args.query)
    if args.fragment is not None:
        uri = uri.with_fragment(args.fragment)
    if args.user is not None:
        uri = uri.with_user_info(args.user, args.password)
    return uri


def describe(uri: Uri) -> dict:
    return {
        "uri": str(uri),
        "scheme": uri.scheme,
        "user_info": uri.user_info,
        "host": uri.host,
        "port": uri.port,
        "authority": uri.authority,
        "path": uri.path,
        "query": uri.query,
        "fragment": uri.fragment,
    }


def main(argv=None) -> int:
    """
    CLI entry point.

    Args:
        argv: Arguments without the program name; sys.argv[1:] when None.

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        uri = apply_overrides(Uri(args.uri), args)
    except InvalidArgumentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    logger.debug(f"Normalized {args.uri!r} to {str(uri)!r}")
    info = describe(uri)

    if args.json:
        print(json.dumps(info, indent=2))
    else:
        for key, value in info.items():
            print(f"{key:<10} {'' if value is None else value}")

    return 0


# =============================================================================
# ENTRY POINT
# =============================================================================

if __name__ == "__main__":
    sys.exit(main())
