from .base import DocumentStore
from .memory import InMemoryDocumentStore
from .mongo import MongoDocumentStore

__all__ = ["DocumentStore", "InMemoryDocumentStore", "MongoDocumentStore"]
