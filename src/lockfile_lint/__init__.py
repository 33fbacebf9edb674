"""lockfile-lint core package.

This package provides the lockfile parsing and policy validation engine used
by the ``lockfile-lint`` command-line entrypoint.
"""

__all__ = [
    "core",
]
