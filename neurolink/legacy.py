"""Commander Data's legacy neural interface, the adaptee.

Every lookup here is a fixed table keyed on :class:`ComponentKind` and,
for the connection-dependent values, :class:`ConnectionState`. The tables
cover both enums exhaustively; anything that is not a member raises
``ValueError``.
"""
from __future__ import annotations

import logging
from typing import Dict, Union

from neurolink.models import ComponentKind, ConnectionState

logger = logging.getLogger(__name__)

KindLike = Union[ComponentKind, str]
StateLike = Union[ConnectionState, str]

NO_ACTIVE_CONNECTION = "No active connection established"

TRANSFER_RATES: Dict[ComponentKind, float] = {
    ComponentKind.CEREBRAL_CORTEX_PATCH: 2458.33,
    ComponentKind.TEMPORAL_INTERFACE_PATCH: 999.878,
    ComponentKind.FRONTAL_INTERFACE_PATCH: 698.336,
}

PACKETS_SENT_RATES: Dict[ComponentKind, float] = {
    ComponentKind.CEREBRAL_CORTEX_PATCH: 512.88,
    ComponentKind.TEMPORAL_INTERFACE_PATCH: 726.91,
    ComponentKind.FRONTAL_INTERFACE_PATCH: 100.3,
}

PATCH_LABELS: Dict[ComponentKind, str] = {
    ComponentKind.CEREBRAL_CORTEX_PATCH: "Cerebral Cortex Patch",
    ComponentKind.TEMPORAL_INTERFACE_PATCH: "Temporal Interface Patch",
    ComponentKind.FRONTAL_INTERFACE_PATCH: "Frontal Interface Patch",
}

MESSAGE_HEADERS: Dict[ComponentKind, str] = {
    kind: f"{label} Header" for kind, label in PATCH_LABELS.items()
}


class LegacyInterfaceLookup:
    """Stateless accessors over the legacy interface tables."""

    def transfer_rate(self, kind: KindLike) -> float:
        kind = ComponentKind.parse(kind)
        rate = TRANSFER_RATES[kind]
        logger.debug("transfer_rate(%s) -> %s", kind, rate)
        return rate

    def packets_sent_rate(self, kind: KindLike, state: StateLike) -> float:
        """Average packets sent; zero for every patch without an active connection."""
        kind = ComponentKind.parse(kind)
        state = ConnectionState.parse(state)
        rate = PACKETS_SENT_RATES[kind] if state is ConnectionState.ENABLED else 0.0
        logger.debug("packets_sent_rate(%s, %s) -> %s", kind, state, rate)
        return rate

    def message_header(self, kind: KindLike, state: StateLike) -> str:
        kind = ComponentKind.parse(kind)
        state = ConnectionState.parse(state)
        if state is not ConnectionState.ENABLED:
            return NO_ACTIVE_CONNECTION
        return MESSAGE_HEADERS[kind]

    def patch_label(self, kind: KindLike) -> str:
        return PATCH_LABELS[ComponentKind.parse(kind)]

    def describe(self, kind: KindLike, state: StateLike = ConnectionState.ENABLED) -> Dict[str, object]:
        """Collect every lookup for ``kind`` into one row."""
        kind = ComponentKind.parse(kind)
        state = ConnectionState.parse(state)
        return {
            "kind": str(kind),
            "label": self.patch_label(kind),
            "state": str(state),
            "transfer_rate": self.transfer_rate(kind),
            "avg_packets_sent": self.packets_sent_rate(kind, state),
            "message_header": self.message_header(kind, state),
        }


__all__ = [
    "LegacyInterfaceLookup",
    "NO_ACTIVE_CONNECTION",
    "TRANSFER_RATES",
    "PACKETS_SENT_RATES",
    "PATCH_LABELS",
    "MESSAGE_HEADERS",
]
