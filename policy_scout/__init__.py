# policy_scout/__init__.py
"""
PolicyScout package initializer.
Defines package version and exposes CLI.
"""
__version__ = "0.1.0"

from policy_scout.cli import cli  # noqa: E402

__all__ = ["__version__", "cli"]
