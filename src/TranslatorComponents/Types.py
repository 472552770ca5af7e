"""Core translator type aliases.

This module intentionally contains **no UI framework imports**.
The translator can expose IDs and progress metadata to a UI, but the core
should not depend on Textual (or any other UI layer) to run headlessly.
"""

from __future__ import annotations

from typing import NewType

# Opaque identifier used to correlate parse nodes / progress events.
# Parse nodes are immutable, so the id is derived from object identity.
ParseNodeId = NewType("ParseNodeId", int)


def node_id(node: object) -> ParseNodeId:
    return ParseNodeId(id(node))
