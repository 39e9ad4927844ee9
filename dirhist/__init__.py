"""Public package surface for dirhist.

Exports ``main`` for programmatic CLI invocation.
Most implementation lives in submodules under ``dirhist``.
"""

from __future__ import annotations

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("dirhist")
except PackageNotFoundError:
    __version__ = "0.0.0.dev"


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["main", "__version__"]
