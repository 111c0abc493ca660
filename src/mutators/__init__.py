from .bulk import BulkMutator, Selection

__all__ = ["BulkMutator", "Selection"]
