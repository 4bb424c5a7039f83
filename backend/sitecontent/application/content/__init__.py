from .reconciler import ContentReconciler, ContentSavedEvent
from .store import ContentStore, SQLAlchemyContentStore

__all__ = [
    "ContentReconciler",
    "ContentSavedEvent",
    "ContentStore",
    "SQLAlchemyContentStore",
]
