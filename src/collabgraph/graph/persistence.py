"""Load/save a GraphStore document on disk.

Atomic writes use tempfile + fsync + os.replace().
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from collabgraph.graph.store import GraphStore

logger = logging.getLogger(__name__)


def load_graph(path: Path) -> GraphStore:
    """Load a store from path; a missing file yields an empty store."""
    if not path.exists():
        logger.debug("graph_file_missing", extra={"file.path": str(path)})
        return GraphStore()
    store = GraphStore.deserialize(path.read_text(encoding="utf-8"))
    logger.info(
        "graph_loaded",
        extra={
            "file.path": str(path),
            "employees": len(store.employees),
            "skipped": store.load_report.skipped if store.load_report else 0,
        },
    )
    return store


def save_graph(store: GraphStore, path: Path) -> None:
    """Write the store's document to path atomically."""
    _write_text_atomic(path, store.serialize())
    logger.info(
        "graph_saved",
        extra={"file.path": str(path), "interactions": len(store.interactions)},
    )


def _write_text_atomic(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        Path(tmp).replace(path)
    except BaseException:
        try:
            Path(tmp).unlink()
        except OSError:
            pass
        raise
