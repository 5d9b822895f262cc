"""
Core delegation functionality.

This package contains the collision check, the NS reconciliation and the
request dispatch that ties them together.
"""

from .cancellation import CancellationToken
from .collision_checker import CollisionChecker
from .delegation_manager import DelegationManager
from .ns_reconciler import NSReconciler, plan_ns_changes

__all__ = [
    "CancellationToken",
    "CollisionChecker",
    "DelegationManager",
    "NSReconciler",
    "plan_ns_changes",
]
