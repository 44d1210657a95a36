"""Cluster store holding CustomResourceDefinitions."""

import logging
from abc import ABC, abstractmethod

import kubernetes
import urllib3
from kubernetes.client.exceptions import ApiException

from crd_manager.crd.base import Unstructured
from crd_manager.errors import (
    CancelledError,
    ConflictError,
    NotFoundError,
    StoreError,
)

logger = logging.getLogger(__name__)


class CRDStore(ABC):
    """Minimal get/create/update contract the reconciler needs.

    Every call takes an optional threading.Event; once it is set the store
    must refuse the call with CancelledError.
    """

    @abstractmethod
    def get(self, name, cancel=None):
        """Return the live object named name, or raise NotFoundError."""
        pass

    @abstractmethod
    def create(self, obj, cancel=None):
        pass

    @abstractmethod
    def update(self, obj, cancel=None):
        """Replace the stored object.

        Must raise ConflictError when obj's resourceVersion is stale.
        """
        pass


class KubernetesCRDStore(CRDStore):
    """CRD store backed by the apiextensions.k8s.io/v1 API."""

    def __init__(self, api=None, request_timeout=None):
        self.api = api or kubernetes.client.ApiextensionsV1Api()
        self.request_timeout = request_timeout

    def get(self, name, cancel=None):
        result = self._call(
            name, cancel, self.api.read_custom_resource_definition, name=name
        )
        return self._to_unstructured(result)

    def create(self, obj, cancel=None):
        result = self._call(
            obj.name,
            cancel,
            self.api.create_custom_resource_definition,
            body=obj.to_dict(),
        )
        return self._to_unstructured(result)

    def update(self, obj, cancel=None):
        result = self._call(
            obj.name,
            cancel,
            self.api.replace_custom_resource_definition,
            name=obj.name,
            body=obj.to_dict(),
        )
        return self._to_unstructured(result)

    def _call(self, obj_name, cancel, method, **kwargs):
        if cancel is not None and cancel.is_set():
            raise CancelledError(
                f"run cancelled before request for {obj_name}", name=obj_name
            )

        if self.request_timeout is not None:
            kwargs["_request_timeout"] = self.request_timeout

        try:
            return method(**kwargs)
        except ApiException as e:
            message = f"{e.status} {e.reason}"
            if e.status == 404:
                raise NotFoundError(message, name=obj_name, status=e.status) from e
            if e.status == 409:
                raise ConflictError(message, name=obj_name, status=e.status) from e
            raise StoreError(message, name=obj_name, status=e.status) from e
        except urllib3.exceptions.HTTPError as e:
            raise StoreError(f"request failed: {e}", name=obj_name) from e

    def _to_unstructured(self, result):
        if isinstance(result, dict):
            return Unstructured(result)
        return Unstructured(self.api.api_client.sanitize_for_serialization(result))
