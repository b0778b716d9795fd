"""Acquisition operations.

Public API:
    Download operations:
        - download_file: Stream a URL into a local file
        - download_filename: Temp file name for a URL

    Sniff operations:
        - classify: Classify bytes as gzip, tar or opaque
        - classify_file: Classify a file by its first block

    Extract operations:
        - peel_layers: Unwrap gzip and tar layers and place the payload
        - gunzip: Decompress one gzip layer
        - untar: Materialize a tar file

    Placement operations:
        - check_writable, ensure_destination, place_file, discard,
          create_workdir, remove_workdir
"""

from wordlistctl.operations.download import download_file, download_filename
from wordlistctl.operations.extract import gunzip, peel_layers, untar
from wordlistctl.operations.placement import (
    check_writable,
    create_workdir,
    discard,
    ensure_destination,
    place_file,
    remove_workdir,
)
from wordlistctl.operations.sniff import classify, classify_file

__all__ = [
    # Download operations
    "download_file",
    "download_filename",
    # Sniff operations
    "classify",
    "classify_file",
    # Extract operations
    "peel_layers",
    "gunzip",
    "untar",
    # Placement operations
    "check_writable",
    "ensure_destination",
    "place_file",
    "discard",
    "create_workdir",
    "remove_workdir",
]
