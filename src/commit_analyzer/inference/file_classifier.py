"""
Path based file classification.

Every changed file is mapped to one :class:`FileCategory` using constant
lookup tables built once at import time. Only the path is inspected,
never the file content. Precedence when several rules could match is
Test > Doc > Config > Source, with Source as the fallback.

All lookups are set membership tests on a handful of keys derived from
the file name, so classification cost does not grow with the size of
the tables.
"""

from __future__ import annotations

import posixpath

from commit_analyzer.diff.models import FileCategory


TEST_SUFFIXES = frozenset({
    # Go, Python, Ruby, Rust
    "_test.go", "_test.py", "_test.rb", "_spec.rb", "_test.rs",
    # JavaScript / TypeScript
    ".test.js", ".test.jsx", ".test.ts", ".test.tsx", ".test.mjs", ".test.cjs",
    ".spec.js", ".spec.jsx", ".spec.ts", ".spec.tsx", ".spec.mjs", ".spec.cjs",
})

DOC_FILENAMES = frozenset({
    "README", "README.md", "README.rst",
    "CHANGELOG", "CHANGELOG.md",
    "CONTRIBUTING.md",
    "LICENSE", "LICENSE.md",
    "AUTHORS", "NOTICE",
})

DOC_EXTENSIONS = frozenset({".md", ".markdown", ".txt", ".rst", ".adoc"})

DEPENDENCY_FILENAMES = frozenset({
    # Node.js
    "package.json", "package-lock.json", "yarn.lock", "pnpm-lock.yaml",
    # Go
    "go.mod", "go.sum",
    # Python
    "requirements.txt", "Pipfile", "Pipfile.lock", "poetry.lock", "pyproject.toml",
    # Java (Maven / Gradle)
    "pom.xml", "build.gradle", "build.gradle.kts", "gradle.properties",
    # Ruby
    "Gemfile", "Gemfile.lock",
    # PHP
    "composer.json", "composer.lock",
    # Rust
    "Cargo.toml", "Cargo.lock",
    # .NET
    "packages.config", "NuGet.config", "nuget.config",
    # Swift / CocoaPods
    "Podfile", "Podfile.lock", "Package.swift",
    # Dart / Flutter
    "pubspec.yaml", "pubspec.lock",
    # CMake, Conan, vcpkg
    "CMakeLists.txt", "CMakeCache.txt", "conanfile.txt", "conanfile.py", "vcpkg.json",
    # Bazel, Buck
    "WORKSPACE", "BUILD", "BUILD.bazel", "BUCK",
    # Clojure, Elixir, Erlang
    "project.clj", "mix.exs", "rebar.config",
})

DEPENDENCY_EXTENSIONS = frozenset({".csproj", ".vbproj", ".fsproj"})

CONFIG_FILENAMES = DEPENDENCY_FILENAMES | frozenset({
    "Makefile", "Dockerfile", "docker-compose.yml", "docker-compose.yaml",
    ".dockerignore", ".gitignore", ".editorconfig",
})

CONFIG_EXTENSIONS = DEPENDENCY_EXTENSIONS | frozenset({
    ".yml", ".yaml", ".toml", ".json", ".xml", ".ini", ".conf", ".cfg", ".properties",
})


def _extension(name: str) -> str:
    ext = posixpath.splitext(name)[1]
    return ext.lower()


def _is_test_name(name: str) -> bool:
    # Compound dot suffix, e.g. "app.test.ts" -> ".test.ts"
    parts = name.split(".")
    if len(parts) >= 3 and ".".join(("",) + tuple(parts[-2:])) in TEST_SUFFIXES:
        return True
    # Underscore suffix, e.g. "pool_test.go" -> "_test.go"
    head, sep, tail = name.rpartition("_")
    if sep and head and sep + tail in TEST_SUFFIXES:
        return True
    return name.startswith("test_") and name.endswith(".py")


def classify_path(path: str) -> FileCategory:
    """Return the category of a repository-relative path.

    Parameters
    ----------
    path : str
        Path of the changed file. May be empty for malformed headers.

    Returns
    -------
    FileCategory
        ``TEST``, ``DOC``, ``CONFIG`` or the default ``SOURCE``.
    """
    name = posixpath.basename(path)
    if not name:
        return FileCategory.SOURCE
    if _is_test_name(name):
        return FileCategory.TEST
    ext = _extension(name)
    if name in DOC_FILENAMES or ext in DOC_EXTENSIONS:
        return FileCategory.DOC
    if name in CONFIG_FILENAMES or ext in CONFIG_EXTENSIONS:
        return FileCategory.CONFIG
    return FileCategory.SOURCE


def is_dependency_manifest(path: str) -> bool:
    """Return True if the path names a dependency manifest or lockfile."""
    name = posixpath.basename(path)
    return name in DEPENDENCY_FILENAMES or _extension(name) in DEPENDENCY_EXTENSIONS
