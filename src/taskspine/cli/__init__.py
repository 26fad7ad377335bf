"""
CLI layer for taskspine.

Provides a Typer application whose sub-commands load a taskfile and print
its task tree.  All graph logic lives in ``taskspine.orchestration`` —
this package handles only terminal transport: argument parsing, coloured
output, and JSON formatting.

Entry point::

    taskspine --help
"""

from taskspine.cli.app import app

__all__ = ["app"]
