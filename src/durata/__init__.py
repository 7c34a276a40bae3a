"""durata – duration phrase extraction toolkit."""

from ._version import __version__

__all__ = [
    "__version__",
    "cli",
    "config",
    "extraction",
    "service",
    "utils",
]
