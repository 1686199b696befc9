from __future__ import annotations
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, Optional

from .component import ComponentKind


@dataclass
class ConnectionRecord:
    """Values gathered during a single adapted connection."""
    kind: ComponentKind
    transfer_rate: Optional[float] = None
    avg_packets_sent: Optional[float] = None
    message_header: Optional[str] = None
    duration: Optional[timedelta] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": str(self.kind),
            "transfer_rate": self.transfer_rate,
            "avg_packets_sent": self.avg_packets_sent,
            "message_header": self.message_header,
            "duration": self.duration.total_seconds() if self.duration is not None else None,
        }
