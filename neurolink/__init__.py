"""NeuroLink: Commander Data meets the Tholian neural interface through an adapter."""
from neurolink.interface import (
    AdaptedInterface,
    ConnectionConfig,
    DelayProfile,
    NeuralInterface,
    TholianInterface,
    open_interface,
)
from neurolink.legacy import LegacyInterfaceLookup
from neurolink.models import ComponentKind, ConnectionRecord, ConnectionState
from neurolink.runner import run_demo

__version__ = "0.1.0"

__all__ = [
    "AdaptedInterface",
    "ComponentKind",
    "ConnectionConfig",
    "ConnectionRecord",
    "ConnectionState",
    "DelayProfile",
    "LegacyInterfaceLookup",
    "NeuralInterface",
    "TholianInterface",
    "open_interface",
    "run_demo",
]
