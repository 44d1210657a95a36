import functools
import logging
import signal
import sys
import threading

import kubernetes

from crd_manager import config
from crd_manager.crd.bundle import get_crd_yaml
from crd_manager.crd.store import KubernetesCRDStore
from crd_manager.deployer import deploy_crds
from crd_manager.errors import CRDManagerError, SetupError

logger = logging.getLogger(__name__)


def configure_logging(level=None):
    """Configure root logging from level, or LOG_LEVEL when not given."""
    level = (level or config.get_log_level()).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def load_kubernetes_config(kubeconfig=None, context=None):
    """ Load cluster credentials.

    In-cluster configuration is tried first unless an explicit kubeconfig
    is given, then the local kubeconfig.
    """
    kubeconfig = kubeconfig or config.get_kubeconfig()
    context = context or config.get_kube_context()

    if not kubeconfig:
        try:
            kubernetes.config.load_incluster_config()
            logger.info("Loaded in-cluster Kubernetes config")
            return
        except kubernetes.config.ConfigException:
            logger.debug("Not running in cluster, falling back to kubeconfig")

    try:
        kubernetes.config.load_kube_config(config_file=kubeconfig, context=context)
        logger.info("Loaded local Kubernetes config")
    except (kubernetes.config.ConfigException, OSError) as e:
        raise SetupError(f"Could not load Kubernetes config: {e}") from e


def build_store():
    """Create the CRD store on top of a fresh API client."""
    timeout = config.get_request_timeout()
    try:
        api = kubernetes.client.ApiextensionsV1Api()
    except Exception as e:
        raise SetupError(f"Failed to create Kubernetes client: {e}") from e
    return KubernetesCRDStore(api, request_timeout=timeout)


def install_signal_handlers(cancel):
    """ Set cancel on SIGINT/SIGTERM; a second signal exits at once.

    Cancellation is checked before each store call, so a request already
    in flight runs until it returns or KUBE_REQUEST_TIMEOUT expires.
    """

    def handler(signum, frame):
        if cancel.is_set():
            logger.warning("Received second signal, exiting")
            sys.exit(1)
        logger.warning(f"Received signal {signum}, cancelling run")
        cancel.set()

    signal.signal(signal.SIGINT, handler)
    signal.signal(signal.SIGTERM, handler)


def run(bundle_path=None, kubeconfig=None, context=None):
    """ Install the CRD bundle once.

    Returns:
        int: Process exit code, 0 on full success
    """
    cancel = threading.Event()
    install_signal_handlers(cancel)

    try:
        load_kubernetes_config(kubeconfig=kubeconfig, context=context)
        store = build_store()
        report = deploy_crds(
            store,
            bundle_provider=functools.partial(get_crd_yaml, bundle_path),
            cancel=cancel,
        )
    except CRDManagerError as e:
        logger.error(f"CRD installation aborted: {e}")
        return 1

    if not report.ok:
        logger.error(f"CRD installation finished with errors: {report.error}")
        return 1

    logger.info("CRD installation complete")
    return 0


def main():
    configure_logging()
    sys.exit(run())


if __name__ == "__main__":
    main()
