from .kv import InMemoryStore, JsonFileStore, KeyValueStore
from .repository import ASSESSMENT_HISTORY_CAP, SESSION_HISTORY_CAP, LearnerRepository

__all__ = [
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "LearnerRepository",
    "SESSION_HISTORY_CAP",
    "ASSESSMENT_HISTORY_CAP",
]
