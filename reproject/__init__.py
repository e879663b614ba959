"""Directory structure listings for projects.

``main`` runs the ``reproject`` command; ``reproject.tree_render`` and
``reproject.structure`` hold the renderer and the file/clipboard delivery.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
