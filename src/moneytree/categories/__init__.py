"""Category tree rules.

Pure helpers (kinds, tree assembly, classification) are exported here. The
access and leaf checks read from the store and live in their own modules.
"""

from .classifier import CategoryClassifier
from .kinds import Classification, Owner, RootKind, SystemOwned, UserOwned
from .tree import CategoryNode, build_category_forest

__all__ = [
    "CategoryClassifier",
    "CategoryNode",
    "Classification",
    "Owner",
    "RootKind",
    "SystemOwned",
    "UserOwned",
    "build_category_forest",
]
