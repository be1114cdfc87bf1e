"""Subcommand handlers for ``cluster-probe``.

Purpose
-------
Resolve the target, build collaborators from the connection cache handed
in by the entrypoint, run the ping session or netperf runner and turn outcomes into exit
codes. This module has no top-level side effects and is safe to import in
tests.

Exit Codes
----------
``0`` success, ``1`` fatal or configuration error, ``130`` cancelled.

Cancellation
------------
``SIGINT`` cancels the command's :class:`CancellationToken`; the ping
session drains its current round and the netperf wait returns at once.
"""

from __future__ import annotations

import argparse
import contextlib
import logging
import signal
import threading
from typing import Iterator, Optional

from ...admin import AdminClient, AnonymousClient
from ...base.cancellation import CancellationToken
from ...base.dto import PingOptions, TargetConfig
from ...base.errors import ErrorCode, ProbeError
from ...base.http import ClientCache
from ...base.logging import LogContext, configure_logger, get_logger, normalized_log_event
from ...config import resolve_target
from ...netperf import NetperfOutcome, run_netperf
from ...probe import PingSession, SessionOutcome
from ..presenter import build_presenter

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CANCELLED = 130

@contextlib.contextmanager
def sigint_cancels(token: CancellationToken) -> Iterator[CancellationToken]:
    """Route ``SIGINT`` to ``token.cancel`` for the duration of the block.

    Outside the main thread signal handlers cannot be installed; the token
    is then only cancellable by its owner.
    """
    if threading.current_thread() is not threading.main_thread():
        yield token
        return

    def _handler(signum, frame):  # noqa: ARG001 - signal handler signature
        token.cancel("interrupted")

    previous = signal.signal(signal.SIGINT, _handler)
    try:
        yield token
    finally:
        signal.signal(signal.SIGINT, previous)


def configure_logging(args: argparse.Namespace) -> logging.Logger:
    level = logging.DEBUG if args.debug else None
    return configure_logger(level=level, file_path=args.log_file)


def _resolve(args: argparse.Namespace) -> TargetConfig:
    return resolve_target(args.target, insecure=args.insecure, debug=args.debug)


def _exit_code(status: str) -> int:
    if status == "success":
        return EXIT_OK
    return EXIT_CANCELLED if status == "cancelled" else EXIT_ERROR


def handle_ping(
    args: argparse.Namespace,
    cache: ClientCache,
    token: Optional[CancellationToken] = None,
) -> int:
    """Run a ping session for ``args.target`` and report its outcome.

    Configuration and construction failures are rendered by the presenter and
    return exit code 1 without any probing.
    """
    configure_logging(args)
    logger = get_logger("cluster_probe.cli")
    presenter = build_presenter(args.json)
    token = token or CancellationToken()
    try:
        options = PingOptions(
            count=args.count,
            error_count=args.error_count,
            interval=args.interval,
            distributed=args.distributed,
        )
    except ValueError as exc:
        outcome = SessionOutcome(
            status="error",
            error=ProbeError(ErrorCode.CONFIGURATION, str(exc), target=args.target),
        )
        presenter.finish(outcome)
        return EXIT_ERROR

    try:
        target = _resolve(args)
        client = cache.get(target)
        session = PingSession(
            AdminClient(client),
            AnonymousClient(client, token=token),
            options,
            presenter,
            token,
            target=target.alias,
        )
        with sigint_cancels(token):
            outcome = session.run()
    except ProbeError as err:
        normalized_log_event(
            logger,
            "ping.failed",
            LogContext(target=args.target),
            phase="setup",
            error_code=err.code.value,
            level=logging.ERROR,
            error=err.message,
        )
        outcome = SessionOutcome(status="error", error=err)
    presenter.finish(outcome)
    return _exit_code(outcome.status)


def handle_netperf(
    args: argparse.Namespace,
    cache: ClientCache,
    token: Optional[CancellationToken] = None,
) -> int:
    """Run one network throughput test for ``args.target``."""
    configure_logging(args)
    presenter = build_presenter(args.json)
    token = token or CancellationToken()
    try:
        target = _resolve(args)
        admin = AdminClient(cache.get(target))
        with sigint_cancels(token):
            outcome = run_netperf(
                admin,
                args.duration,
                token,
                on_progress=presenter.netperf_progress,
                target=target.alias,
            )
    except ProbeError as err:
        outcome = NetperfOutcome(status="error", error=err)
    presenter.netperf_finish(outcome)
    return _exit_code(outcome.status)


__all__ = [
    "EXIT_OK",
    "EXIT_ERROR",
    "EXIT_CANCELLED",
    "sigint_cancels",
    "handle_ping",
    "handle_netperf",
]
