from .consolidator import Consolidator
from .duplicate_resolver import DuplicateResolver

__all__ = ["Consolidator", "DuplicateResolver"]
