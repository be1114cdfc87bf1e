"""Allows running the CLI via ``python -m cluster_probe.service.cli``."""

from __future__ import annotations

from . import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
