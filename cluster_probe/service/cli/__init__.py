"""``cluster-probe`` command-line entrypoint.

Wires argument parsing to the handlers in ``cli_actions``; performs no probe
logic directly. The connection cache lives for one invocation of
:func:`main` and is handed to the handler explicitly.
"""

from __future__ import annotations

import sys
from typing import Optional

from ...base.http import ClientCache
from .cli_actions import handle_netperf, handle_ping
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None, *, cache: Optional[ClientCache] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.
    cache: Optional[ClientCache]
        Connection cache to use. When omitted one is created for this call
        and closed before returning; a supplied cache stays open.

    Returns
    -------
    int
        Process exit code (0 success, 1 error, 130 cancelled).
    """
    args = build_parser().parse_args(list(sys.argv[1:] if argv is None else argv))
    owned = cache is None
    cache = cache or ClientCache()
    try:
        if args.cmd == "netperf":
            return handle_netperf(args, cache)
        return handle_ping(args, cache)
    finally:
        if owned:
            cache.close()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
