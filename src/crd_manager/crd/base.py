"""Schema-agnostic representation of decoded resources."""

import copy
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class CRDMetadata(BaseModel):
    """The subset of Kubernetes object metadata the reconciler relies on."""

    name: str = Field(min_length=1)
    labels: Optional[Dict[str, str]] = None
    annotations: Optional[Dict[str, str]] = None
    resourceVersion: Optional[str] = None

    class Config:
        extra = "allow"


class Unstructured:
    """A decoded resource kept as a plain mapping.

    Only apiVersion, kind, name, labels and resourceVersion are exposed
    through accessors; every other field is carried through untouched.
    """

    def __init__(self, obj: Dict[str, Any]):
        self._obj = obj

    @property
    def api_version(self) -> str:
        return self._obj.get("apiVersion", "")

    @property
    def kind(self) -> str:
        return self._obj.get("kind", "")

    @property
    def metadata(self) -> Dict[str, Any]:
        return self._obj.get("metadata") or {}

    @property
    def name(self) -> str:
        return self.metadata.get("name", "")

    @property
    def labels(self) -> Dict[str, str]:
        return self.metadata.get("labels") or {}

    @property
    def resource_version(self) -> Optional[str]:
        return self.metadata.get("resourceVersion")

    @resource_version.setter
    def resource_version(self, value: Optional[str]):
        if value is None:
            self.metadata.pop("resourceVersion", None)
        else:
            self._obj.setdefault("metadata", {})["resourceVersion"] = value

    def to_dict(self) -> Dict[str, Any]:
        """Return a deep copy of the underlying mapping."""
        return copy.deepcopy(self._obj)

    def __eq__(self, other):
        if not isinstance(other, Unstructured):
            return NotImplemented
        return self._obj == other._obj

    def __repr__(self):
        return f"Unstructured(kind={self.kind!r}, name={self.name!r})"
