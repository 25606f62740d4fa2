"""Addon configuration file parsing."""

import json
from typing import Any, Iterable, Sequence

from .models import ExtractionResult, UploadedFile


ADDON_COLLECTION_PATH = ("addons", "addons")


def is_json_file(uploaded: UploadedFile, accepted_types: Iterable[str]) -> bool:
    """Check the declared content type against the accepted JSON media types."""
    accepted = {t.strip().lower() for t in accepted_types}
    return uploaded.media_type in accepted


def extract_addon_collection(
    document: Any,
    path: Sequence[str] = ADDON_COLLECTION_PATH,
    require_list: bool = False
) -> ExtractionResult:
    """Walk ``path`` through nested objects and return what sits at the end.

    Args:
        document: Parsed JSON document
        path: Object keys to follow
        require_list: Reject values that are not JSON arrays

    Returns:
        ExtractionResult holding either the value or the reason it is missing
    """
    node = document
    walked = []
    for key in path:
        if not isinstance(node, dict):
            where = ".".join(walked) or "document root"
            return ExtractionResult.failed(f"{where} is not an object")
        if key not in node:
            return ExtractionResult.failed(f"missing key '{'.'.join(walked + [key])}'")
        node = node[key]
        walked.append(key)

    if node is None:
        return ExtractionResult.failed(f"'{'.'.join(walked)}' is null")

    if require_list and not isinstance(node, list):
        return ExtractionResult.failed(
            f"'{'.'.join(walked)}' is {type(node).__name__}, expected a list"
        )

    return ExtractionResult.found(node)


def parse_addon_file(text: str, require_list: bool = False) -> ExtractionResult:
    """Parse JSON text and extract the addon collection from it."""
    try:
        document = json.loads(text)
    except (ValueError, RecursionError) as e:
        return ExtractionResult.failed(f"malformed JSON: {e}")

    return extract_addon_collection(document, require_list=require_list)
