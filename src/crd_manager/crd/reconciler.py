"""Create, update or leave alone a single CRD."""

import logging
from enum import Enum

from crd_manager.crd.ownership import is_managed_externally
from crd_manager.errors import NotFoundError

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED_MANAGED = "skipped-managed"
    FAILED = "failed"


def reconcile_crd(desired, store, cancel=None, log=None):
    """ Bring one CRD in the store in line with its desired state.

    The live object decides ownership: if it carries the managed-by label
    it is left untouched. Store errors other than NotFoundError propagate
    unchanged and nothing is retried.

    Args:
        desired: Unstructured CRD as declared in the bundle
        store: CRDStore to read from and write to
        cancel: Optional threading.Event passed to every store call
        log: Logger to report decisions on (defaults to this module's)

    Returns:
        Outcome: CREATED, UPDATED or SKIPPED_MANAGED
    """
    log = log or logger
    name = desired.name

    try:
        existing = store.get(name, cancel=cancel)
    except NotFoundError:
        log.info(f"Creating CRD {name}")
        store.create(desired, cancel=cancel)
        return Outcome.CREATED

    # update is rejected without the live resourceVersion
    desired.resource_version = existing.resource_version

    if is_managed_externally(existing):
        log.info(f"CRD {name} is managed externally, leaving it unchanged")
        return Outcome.SKIPPED_MANAGED

    log.info(f"Updating CRD {name}")
    store.update(desired, cancel=cancel)
    return Outcome.UPDATED
