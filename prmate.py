#!/usr/bin/env python
"""
Thin wrapper script to invoke the prmate CLI from a checkout.

Running ``python prmate.py`` is equivalent to running the ``prmate``
console script installed via ``pyproject.toml``.
"""

from prmate.cli import main


if __name__ == "__main__":
    main(prog_name="prmate")
