"""differing: a local diff viewer backend for git repositories."""

__version__ = "0.1.0"
