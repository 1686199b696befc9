"""Value types shared by the legacy lookups and the neural interfaces."""
from .component import ComponentKind, ConnectionState
from .connection_record import ConnectionRecord

__all__ = [
    "ComponentKind",
    "ConnectionState",
    "ConnectionRecord",
]
