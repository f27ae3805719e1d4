from __future__ import annotations

"""
Network Communication Infrastructure.

Facade over the HTTP clients used to hand a finished index to external
collaborators.
"""

from codeatlas.infra.network.sink_client import build_document, new_project_id, publish_index

__all__ = [
    "build_document",
    "new_project_id",
    "publish_index",
]
