"""Human and machine renderings of probe results.

Purpose
-------
Implement the ``ResultPresenter`` protocol consumed by the probe session,
plus the netperf renderings used by the sibling ``netperf`` command.

* :class:`TextPresenter` prints one line per endpoint with the columns of a
  round aligned (cells padded to the widest value plus three spaces).
* :class:`JsonPresenter` prints one indented JSON document per round.

Fatal errors and cancellations are written to the error stream; round
output goes to the output stream. Streams are injectable for tests.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, List, Optional, TextIO

from ..base.constants import APP_NAME
from ..base.errors import ProbeError
from ..base.models import EndpointStatsView, NetperfResult, RoundSnapshot

_PADDING = 3
_BYTE_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB")


def _align(rows: List[List[str]]) -> List[str]:
    """Pad every cell but the last of each row to its column width."""
    widths: Dict[int, int] = {}
    for row in rows:
        for i, cell in enumerate(row[:-1]):
            widths[i] = max(widths.get(i, 0), len(cell))
    lines = []
    for row in rows:
        cells = [cell.ljust(widths[i] + _PADDING) for i, cell in enumerate(row[:-1])]
        lines.append("".join(cells) + (row[-1] if row else ""))
    return lines


def _endpoint_label(counter: int, view: EndpointStatsView) -> str:
    ep = view.endpoint
    text = f"{counter}: {ep.scheme}://{ep.host}"
    if ep.port:
        text += f":{ep.port}"
    return text


def format_snapshot(snapshot: RoundSnapshot) -> str:
    """Render one round as aligned text lines."""
    rows = [
        [
            _endpoint_label(snapshot.counter, v),
            f"min={v.min}",
            f"max={v.max}",
            f"average={v.average}",
            f"errors={v.error_count}",
            f"roundtrip={v.roundtrip}",
        ]
        for v in snapshot.servers
    ]
    return "\n".join(_align(rows))


def format_bytes_per_second(value: int) -> str:
    """Render a byte rate with binary prefixes, e.g. ``1.5 GiB/s``."""
    amount = float(value)
    for unit in _BYTE_UNITS:
        if amount < 1024 or unit == _BYTE_UNITS[-1]:
            break
        amount /= 1024
    if unit == "B":
        return f"{int(amount)} B/s"
    return f"{amount:.1f} {unit}/s"


def error_payload(err: ProbeError) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"message": err.message, "code": err.code.value}
    if err.target:
        payload["target"] = err.target
    if err.endpoint:
        payload["endpoint"] = err.endpoint
    return payload


class _BasePresenter:
    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> None:
        self._out = out or sys.stdout
        self._err = err or sys.stderr

    def _write(self, stream: TextIO, text: str) -> None:
        stream.write(text + "\n")
        stream.flush()


class TextPresenter(_BasePresenter):
    """Aligned plain-text output."""

    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> None:
        super().__init__(out, err)
        self._progress_dots = 0

    def emit(self, snapshot: RoundSnapshot) -> None:
        if snapshot.servers:
            self._write(self._out, format_snapshot(snapshot))

    def finish(self, outcome) -> None:
        if outcome.status == "error" and outcome.error is not None:
            self._write(self._err, f"{APP_NAME}: <ERROR> {outcome.error}")
        elif outcome.status == "cancelled":
            self._write(self._err, f"{APP_NAME}: cancelled after {outcome.rounds} round(s)")

    # netperf ----------------------------------------------------------- #
    def netperf_progress(self) -> None:
        self._progress_dots += 1
        self._err.write(".")
        self._err.flush()

    def netperf_finish(self, outcome) -> None:
        if self._progress_dots:
            self._err.write("\n")
            self._progress_dots = 0
        if outcome.status == "error" and outcome.error is not None:
            self._write(self._err, f"{APP_NAME}: <ERROR> {outcome.error}")
            return
        if outcome.status == "cancelled":
            self._write(self._err, f"{APP_NAME}: netperf cancelled")
            return
        self._write(self._out, format_netperf(outcome.result))


def format_netperf(result: NetperfResult) -> str:
    """Render per-node throughput as aligned text."""
    rows = []
    for node in result.node_results:
        if node.error:
            rows.append([node.endpoint, f"ERROR: {node.error}"])
        else:
            rows.append(
                [
                    node.endpoint,
                    f"TX: {format_bytes_per_second(node.tx)}",
                    f"RX: {format_bytes_per_second(node.rx)}",
                ]
            )
    if not rows:
        return "no results"
    return "\n".join(_align(rows))


class JsonPresenter(_BasePresenter):
    """One indented JSON document per round."""

    def emit(self, snapshot: RoundSnapshot) -> None:
        self._write(self._out, json.dumps(snapshot.to_dict(), indent=1, ensure_ascii=False))

    def finish(self, outcome) -> None:
        if outcome.status == "error" and outcome.error is not None:
            doc = {"status": "error", "error": error_payload(outcome.error)}
            self._write(self._err, json.dumps(doc, indent=1, ensure_ascii=False))
        elif outcome.status == "cancelled":
            doc = {"status": "cancelled", "counter": str(outcome.rounds)}
            self._write(self._out, json.dumps(doc, indent=1))

    def netperf_progress(self) -> None:
        return None

    def netperf_finish(self, outcome) -> None:
        doc: Dict[str, Any] = {"type": "net", "final": True, "status": outcome.status}
        if outcome.result is not None:
            doc["netResult"] = outcome.result.to_dict()
        if outcome.error is not None:
            doc["error"] = error_payload(outcome.error)
        stream = self._err if outcome.status == "error" else self._out
        self._write(stream, json.dumps(doc, indent=1, ensure_ascii=False))


def build_presenter(json_mode: bool, out: Optional[TextIO] = None, err: Optional[TextIO] = None):
    """Return the presenter for the requested output mode."""
    return JsonPresenter(out, err) if json_mode else TextPresenter(out, err)


__all__ = [
    "TextPresenter",
    "JsonPresenter",
    "build_presenter",
    "format_snapshot",
    "format_netperf",
    "format_bytes_per_second",
]
