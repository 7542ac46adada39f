"""Expand custom Markdown components and build documentation navigation.

This package exposes the CLI entry points used by ``docsmith render`` and
``docsmith check`` along with the component engine and navigation builder.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from docsmith import main
>>> main()  # doctest: +SKIP
>>> from docsmith import app
>>> "docsmith" in app.name
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
