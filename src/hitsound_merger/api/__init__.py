"""HTTP surface for the merger."""

from hitsound_merger.api.server import create_app

__all__ = ["create_app"]
