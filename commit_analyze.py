#!/usr/bin/env python
"""
Thin wrapper script to invoke the commit_analyzer CLI.

Running ``python commit_analyze.py`` is equivalent to running the
``commit-analyze`` console script installed via ``pyproject.toml``.
"""

from commit_analyzer.cli import main


if __name__ == "__main__":
    main(prog_name="commit-analyze")
