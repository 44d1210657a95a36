"""Apply every CRD of the bundle to the cluster, one at a time."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional

from crd_manager.crd.bundle import decode_document, get_crd_yaml, split_bundle
from crd_manager.crd.reconciler import Outcome, reconcile_crd
from crd_manager.errors import DecodeError, MalformedBundleError, StoreError

logger = logging.getLogger(__name__)


@dataclass
class ObjectResult:
    """What happened to one bundle document."""

    index: int
    name: Optional[str]
    outcome: Outcome
    error: Optional[Exception] = None


@dataclass
class DeployReport:
    """Per-document results of a run, in bundle order."""

    results: List[ObjectResult] = field(default_factory=list)

    def record(self, result):
        self.results.append(result)

    @property
    def error(self):
        """The most recently recorded error, or None."""
        for result in reversed(self.results):
            if result.error is not None:
                return result.error
        return None

    @property
    def ok(self):
        return self.error is None

    def counts(self):
        return Counter(result.outcome.value for result in self.results)


def deploy_crds(store, bundle_provider=get_crd_yaml, cancel=None, log=None):
    """ Reconcile every CRD in the bundle against the store.

    A bundle that cannot be split aborts the run. A document that fails to
    decode or reconcile is logged and recorded and the run moves on to the
    next one; the returned report's error is the last one recorded.

    Args:
        store: CRDStore to apply CRDs to
        bundle_provider: Zero-argument callable returning the raw bundle
        cancel: Optional threading.Event threaded into store calls
        log: Logger to report progress on (defaults to this module's)

    Returns:
        DeployReport
    """
    log = log or logger
    bundle = bundle_provider()

    try:
        documents = list(split_bundle(bundle))
    except MalformedBundleError as e:
        log.error(f"Failed to split CRD bundle: {e}")
        raise

    report = DeployReport()
    for index, document in enumerate(documents):
        try:
            desired = decode_document(document)
        except DecodeError as e:
            log.error(f"Failed to decode CRD document #{index}: {e}")
            report.record(ObjectResult(index, None, Outcome.FAILED, e))
            continue

        log.info(f"Considering CRD {desired.name}")
        try:
            outcome = reconcile_crd(desired, store, cancel=cancel, log=log)
        except StoreError as e:
            log.error(f"Failed to apply CRD {desired.name}: {e}")
            report.record(ObjectResult(index, desired.name, Outcome.FAILED, e))
            continue
        except Exception as e:
            log.error(f"Unexpected error applying CRD {desired.name}: {e}")
            report.record(ObjectResult(index, desired.name, Outcome.FAILED, e))
            continue

        report.record(ObjectResult(index, desired.name, outcome))

    summary = ", ".join(
        f"{key}={value}" for key, value in sorted(report.counts().items())
    )
    log.info(f"Processed {len(report.results)} CRD documents {summary}".rstrip())
    return report
