"""CRD bundle handling and reconciliation."""

from .base import CRDMetadata, Unstructured
from .reconciler import Outcome, reconcile_crd
from .store import CRDStore, KubernetesCRDStore

__all__ = [
    "CRDMetadata",
    "Unstructured",
    "Outcome",
    "reconcile_crd",
    "CRDStore",
    "KubernetesCRDStore",
]
