# Fake implementations for testing

from .failing_store import FailingStore
from .recording_store import RecordingStore

__all__ = ["FailingStore", "RecordingStore"]
