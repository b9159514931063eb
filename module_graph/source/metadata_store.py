"""
Local cache of module metadata documents.

This module reads and writes the ``metadata/`` directory, which holds one
``<group>:<module>.json`` document per module so runs can work offline.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Union

from module_graph.exceptions import MetadataFormatError
from module_graph.models.metadata import ModuleMetadata, Variant

logger = logging.getLogger(__name__)


def load_metadata_file(path: Union[str, Path]) -> ModuleMetadata:
    """Parse one metadata document.

    Raises:
        MetadataFormatError: If the file is not valid JSON or not a valid
            metadata document.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MetadataFormatError(f"invalid JSON: {e}", source=str(path)) from e
    return ModuleMetadata.from_dict(data, source=str(path))


def read_metadata(directory: Union[str, Path]) -> List[ModuleMetadata]:
    """Read every ``*.json`` document in a directory.

    Files are read in sorted name order. A missing directory yields an
    empty list.
    """
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning("Metadata directory %s does not exist", directory)
        return []

    records = [load_metadata_file(path) for path in sorted(directory.glob("*.json"))]
    logger.debug("Read %d metadata documents from %s", len(records), directory)
    return records


def merge_metadata(records: Iterable[ModuleMetadata]) -> List[ModuleMetadata]:
    """Merge records of the same module into one.

    The merged record keeps the component and creators of the first record
    and the union of all variants, deduplicated by name (first wins).
    Groups keep the order of their first record.
    """
    groups: Dict[str, List[ModuleMetadata]] = {}
    for record in records:
        groups.setdefault(record.path, []).append(record)

    merged: List[ModuleMetadata] = []
    for group in groups.values():
        first = group[0]
        variants: Dict[str, Variant] = {}
        for record in group:
            for variant in record.variants:
                variants.setdefault(variant.name, variant)
        merged.append(
            ModuleMetadata(
                component=first.component,
                created_by=first.created_by,
                variants=tuple(variants.values()),
            )
        )
    return merged


def save_metadata(
    records: Iterable[ModuleMetadata], directory: Union[str, Path]
) -> List[Path]:
    """Write records to the cache directory, one merged file per module.

    Returns:
        List[Path]: Paths of the written files.
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    written: List[Path] = []
    for record in merge_metadata(records):
        path = directory / f"{record.path}.json"
        path.write_text(
            json.dumps(record.to_dict(), ensure_ascii=False), encoding="utf-8"
        )
        written.append(path)

    logger.debug("Saved %d metadata documents to %s", len(written), directory)
    return written
