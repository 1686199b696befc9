"""Scripted demo: connect Data through each interface patch in turn."""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from neurolink.interface import AdaptedInterface, ConnectionConfig, open_interface
from neurolink.legacy import KindLike
from neurolink.models import ComponentKind, ConnectionRecord

logger = logging.getLogger(__name__)


def run_demo(
    kinds: Optional[Iterable[KindLike]] = None,
    *,
    config: Optional[ConnectionConfig] = None,
    plain: bool = False,
) -> List[ConnectionRecord]:
    """Connect a fresh adapter for every kind, one after another.

    ``kinds=None`` means every kind; an empty iterable connects nothing.
    ``plain`` first connects the bare Tholian interface, which has no way to
    talk to Data and so produces no record.
    """
    config = config or ConnectionConfig()
    selected = [ComponentKind.parse(kind) for kind in kinds] if kinds is not None else list(ComponentKind)

    if plain:
        open_interface(config=config).connect()

    records: List[ConnectionRecord] = []
    for kind in selected:
        interface = AdaptedInterface(kind, config=config)
        logger.debug("Connecting through %s", kind)
        records.append(interface.connect())
    return records


__all__ = ["run_demo"]
