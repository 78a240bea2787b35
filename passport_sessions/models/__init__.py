from .session import SessionRecord, SessionRecordPatch

__all__ = ["SessionRecord", "SessionRecordPatch"]
