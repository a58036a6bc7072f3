"""File-based JSON storage backend."""

from __future__ import annotations

from pathlib import Path

from ..models import TraceGraph
from ..serializers import load_trace_json, save_trace_json


class FileStore:
    """One ``<trace_id>.json`` file per trace inside ``directory``.

    Re-flushing a trace rewrites its file in place; readers such as
    ``waterfalltracer list`` never see a half-written file.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, trace_id: str) -> Path:
        return self.directory / f"{trace_id}.json"

    def save(self, trace: TraceGraph) -> None:
        save_trace_json(trace, self.path_for(trace.trace_id))

    def load(self, trace_id: str) -> TraceGraph | None:
        path = self.path_for(trace_id)
        if not path.is_file():
            return None
        return load_trace_json(path)

    def list_traces(self) -> list[str]:
        """Trace ids ordered by when each trace was last flushed."""
        paths = sorted(
            self.directory.glob("*.json"),
            key=lambda path: (path.stat().st_mtime_ns, path.stem),
        )
        return [path.stem for path in paths]
