"""Detection of CRDs owned by an external package manager."""

APP_MANAGED_BY_LABEL = "app.kubernetes.io/managed-by"


def is_managed_externally(obj):
    """ Whether obj carries the managed-by label, whatever its value.

    Args:
        obj: Unstructured object, typically the live cluster copy
    """
    labels = obj.labels
    if not labels:
        return False
    return APP_MANAGED_BY_LABEL in labels
