"""Change classifier."""

from renscriptpy.classify.classifier import ChangeKind, classify_change

__all__ = [
    "ChangeKind",
    "classify_change",
]
