"""Inventory files exchanged with a peer.

An inventory is a JSON array of song folders::

    [{"id": 1234, "name": "Artist - Title", "checksum": "9F86D0..."}]

Local paths are never written; they mean nothing on the other machine.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, List

from pydantic import TypeAdapter, ValidationError

from ...models import SongFolder
from ..errors import InventoryFormatError

logger = logging.getLogger(__name__)

_inventory_adapter = TypeAdapter(List[SongFolder])


def dump_inventory(folders: Iterable[SongFolder]) -> str:
    """Serialize folders to the inventory JSON format."""
    payload = [folder.model_dump(mode="json", exclude={"path"}) for folder in folders]
    return json.dumps(payload, indent=2, ensure_ascii=False)


def parse_inventory(raw: str) -> List[SongFolder]:
    """Parse inventory JSON.

    Args:
        raw: JSON text

    Returns:
        Song folders in file order

    Raises:
        InventoryFormatError: If the text is not a valid inventory
    """
    try:
        return _inventory_adapter.validate_json(raw)
    except ValidationError as e:
        raise InventoryFormatError(
            f"Invalid inventory ({e.error_count()} errors): {e}"
        ) from e


def save_inventory(path: Path, folders: Iterable[SongFolder]) -> int:
    """Write folders to an inventory file.

    Args:
        path: Destination file; parent directories are created
        folders: Folders to write

    Returns:
        Number of folders written
    """
    folders = list(folders)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_inventory(folders), encoding="utf-8")
    logger.info("Wrote %d folders to %s", len(folders), path)
    return len(folders)


def load_inventory(path: Path) -> List[SongFolder]:
    """Read an inventory file.

    Raises:
        InventoryFormatError: If the file content is not a valid inventory
        OSError: If the file cannot be read
    """
    path = Path(path)
    folders = parse_inventory(path.read_text(encoding="utf-8"))
    logger.info("Loaded %d folders from %s", len(folders), path)
    return folders
