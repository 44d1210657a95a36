import copy

import pytest
import yaml

from crd_manager.crd.base import Unstructured
from crd_manager.crd.store import CRDStore
from crd_manager.errors import CancelledError, ConflictError, NotFoundError


class FakeCRDStore(CRDStore):
    """In-memory CRD store bumping resourceVersion on every write."""

    def __init__(self, objects=None):
        self.objects = {}
        self.calls = []
        self._version = 100
        for obj in objects or []:
            self.put(obj)

    def put(self, obj):
        stored = copy.deepcopy(obj)
        stored.setdefault("metadata", {})["resourceVersion"] = self._next_version()
        self.objects[stored["metadata"]["name"]] = stored
        return stored

    def get(self, name, cancel=None):
        self._check(cancel, name)
        self.calls.append(("get", name))
        if name not in self.objects:
            raise NotFoundError("404 Not Found", name=name, status=404)
        return Unstructured(copy.deepcopy(self.objects[name]))

    def create(self, obj, cancel=None):
        self._check(cancel, obj.name)
        self.calls.append(("create", obj.name))
        if obj.name in self.objects:
            raise ConflictError("409 AlreadyExists", name=obj.name, status=409)
        return Unstructured(copy.deepcopy(self.put(obj.to_dict())))

    def update(self, obj, cancel=None):
        self._check(cancel, obj.name)
        self.calls.append(("update", obj.name))
        current = self.objects.get(obj.name)
        if current is None:
            raise NotFoundError("404 Not Found", name=obj.name, status=404)
        if obj.resource_version != current["metadata"]["resourceVersion"]:
            raise ConflictError("409 Conflict", name=obj.name, status=409)
        return Unstructured(copy.deepcopy(self.put(obj.to_dict())))

    def _next_version(self):
        self._version += 1
        return str(self._version)

    @staticmethod
    def _check(cancel, name):
        if cancel is not None and cancel.is_set():
            raise CancelledError(f"run cancelled before request for {name}", name=name)


def crd_dict(name, labels=None, group="example.io"):
    metadata = {"name": name}
    if labels is not None:
        metadata["labels"] = labels
    return {
        "apiVersion": "apiextensions.k8s.io/v1",
        "kind": "CustomResourceDefinition",
        "metadata": metadata,
        "spec": {
            "group": group,
            "names": {"kind": "Widget", "plural": name.split(".")[0]},
            "scope": "Namespaced",
            "versions": [{"name": "v1", "served": True, "storage": True}],
        },
    }


@pytest.fixture
def make_crd():
    """Factory for CRD mappings."""
    return crd_dict


@pytest.fixture
def make_crd_yaml():
    """Factory for CRD documents as YAML text."""

    def factory(name, labels=None, group="example.io"):
        return yaml.safe_dump(crd_dict(name, labels, group), sort_keys=False)

    return factory


@pytest.fixture
def store():
    return FakeCRDStore()


@pytest.fixture
def fake_store_class():
    return FakeCRDStore
