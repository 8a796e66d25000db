"""Remote inventory module.

Reads and writes the inventory files exchanged with a peer.
"""

from .inventory_file import (
    dump_inventory,
    load_inventory,
    parse_inventory,
    save_inventory,
)

__all__ = [
    "dump_inventory",
    "parse_inventory",
    "load_inventory",
    "save_inventory",
]
