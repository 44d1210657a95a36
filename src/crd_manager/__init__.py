"""crd-manager: install and reconcile a bundle of CRDs into a cluster."""

__version__ = "0.1.0"
