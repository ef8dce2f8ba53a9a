"""
Unified diff parsing.

The data model lives in :mod:`commit_analyzer.diff.models`; the text is
split by :mod:`commit_analyzer.diff.segmenter` and the full analysis is
run by :func:`commit_analyzer.diff.parser.analyze_diff`.
"""

from .models import DiffParseError, DiffResult, FileCategory, FileRecord  # noqa: F401
