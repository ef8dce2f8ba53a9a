"""
Inference of file categories, commit types and scopes.

See :mod:`commit_analyzer.inference.file_classifier`,
:mod:`commit_analyzer.inference.commit_type` and
:mod:`commit_analyzer.inference.scope` for details.
"""

from .file_classifier import classify_path, is_dependency_manifest  # noqa: F401
from .commit_type import CommitType, infer_commit_type  # noqa: F401
from .scope import infer_scopes  # noqa: F401
