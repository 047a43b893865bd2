"""In-memory store of analysis sessions for the HTTP API."""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime

from dependency_explorer.analysis.result import AnalysisResult


@dataclass
class AnalysisSession:
    result: AnalysisResult
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    source: str = "inline"  # "inline", "files" or a directory path
    file_count: int = 0
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    def summary(self) -> dict:
        return {
            "id": self.id,
            "source": self.source,
            "file_count": self.file_count,
            "timestamp": self.timestamp,
            "classes": len(self.result.dependency_data),
        }


class AppState:
    """Process-wide session store shared by all API routes."""

    def __init__(self):
        self._sessions: dict[str, AnalysisSession] = {}
        self._lock = threading.Lock()

    def add(self, session: AnalysisSession) -> AnalysisSession:
        with self._lock:
            self._sessions[session.id] = session
        return session

    def get(self, session_id: str) -> AnalysisSession | None:
        return self._sessions.get(session_id)

    def delete(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def list(self) -> list[AnalysisSession]:
        return list(self._sessions.values())

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()


state = AppState()
