"""Outer surface: presenters and the command-line entrypoint."""

from .presenter import JsonPresenter, TextPresenter, build_presenter

__all__ = ["JsonPresenter", "TextPresenter", "build_presenter"]
