"""Environment driven settings."""

import os

from crd_manager.errors import SetupError


def get_log_level():
    """Log level name, from LOG_LEVEL (default INFO)."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_bundle_path():
    """Path of a CRD bundle overriding the packaged one, if any."""
    return os.getenv("CRD_BUNDLE_PATH") or None


def get_kubeconfig():
    return os.getenv("KUBECONFIG") or None


def get_kube_context():
    return os.getenv("KUBE_CONTEXT") or None


def get_request_timeout():
    """Per-request timeout in seconds for API calls, None for the client default."""
    value = os.getenv("KUBE_REQUEST_TIMEOUT")
    if not value:
        return None
    try:
        timeout = float(value)
    except ValueError as e:
        raise SetupError(f"KUBE_REQUEST_TIMEOUT must be a number, got {value!r}") from e
    if timeout <= 0:
        raise SetupError(f"KUBE_REQUEST_TIMEOUT must be positive, got {value!r}")
    return timeout
