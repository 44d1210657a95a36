"""Splitting, decoding and loading of the multi-document CRD bundle."""

import logging
import re
from importlib import resources
from pathlib import Path

import yaml
from pydantic import ValidationError

from crd_manager import config
from crd_manager.crd.base import CRDMetadata, Unstructured
from crd_manager.errors import DecodeError, MalformedBundleError, SetupError

logger = logging.getLogger(__name__)

DOCUMENT_SEPARATOR = re.compile(r"^---\s*(#.*)?$")
DEFAULT_BUNDLE = "crds.yaml"


def split_bundle(bundle):
    """ Split a bundle into its YAML documents.

    Documents are yielded stripped and in bundle order; whitespace-only
    segments are dropped. Document content is not inspected here.

    Args:
        bundle: Bundle text, as str or UTF-8 encoded bytes
    """
    if isinstance(bundle, (bytes, bytearray)):
        try:
            bundle = bundle.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedBundleError(f"bundle is not valid UTF-8: {e}") from e
    elif not isinstance(bundle, str):
        raise MalformedBundleError(
            f"bundle must be text, got {type(bundle).__name__}"
        )

    section = []
    for line in bundle.splitlines():
        if DOCUMENT_SEPARATOR.match(line):
            document = "\n".join(section).strip()
            if document:
                yield document
            section = []
            continue
        section.append(line)

    document = "\n".join(section).strip()
    if document:
        yield document


def decode_document(document):
    """ Decode one YAML document into an Unstructured object.

    Args:
        document: Text of a single resource document
    """
    try:
        obj = yaml.safe_load(document)
    except yaml.YAMLError as e:
        raise DecodeError(f"invalid YAML: {e}") from e

    if not isinstance(obj, dict):
        raise DecodeError(
            f"document must be a mapping, got {type(obj).__name__}"
        )

    for field in ("apiVersion", "kind"):
        if not isinstance(obj.get(field), str) or not obj[field]:
            raise DecodeError(f"missing required field {field}")

    metadata = obj.get("metadata")
    if not isinstance(metadata, dict):
        raise DecodeError("missing required field metadata")

    try:
        CRDMetadata.model_validate(metadata)
    except ValidationError as e:
        raise DecodeError(f"invalid metadata: {e}") from e

    return Unstructured(obj)


def encode_object(obj):
    """Render an Unstructured object back to YAML."""
    return yaml.safe_dump(obj.to_dict(), default_flow_style=False, sort_keys=False)


def get_crd_yaml(path=None):
    """ Return the raw CRD bundle.

    An explicit path, then the file named by CRD_BUNDLE_PATH, take
    precedence over the bundle shipped with the package.

    Args:
        path: Optional bundle file to read instead
    """
    bundle_path = path or config.get_bundle_path()
    try:
        if bundle_path:
            logger.debug(f"Reading CRD bundle from {bundle_path}")
            return Path(bundle_path).read_bytes()
        return (resources.files("crd_manager") / "data" / DEFAULT_BUNDLE).read_bytes()
    except OSError as e:
        raise SetupError(f"could not read CRD bundle: {e}") from e
