"""Diff processing, secret masking, PATH setup and terminal UI for commit message tools."""

__version__ = "0.1.0"