from __future__ import annotations
from enum import Enum
import logging

logger = logging.getLogger(__name__)


class _TaggedEnum(str, Enum):
    """Enum whose members print as their bare tag."""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def _aliases(cls) -> dict:
        return {}

    @classmethod
    def parse(cls, raw):
        """Resolve a member from its tag, member name or short alias."""
        if isinstance(raw, cls):
            return raw
        text = str(raw).strip()
        for member in cls:
            if text == member.value or text.upper() == member.name:
                return member
        alias = cls._aliases().get(text.lower().replace("_", "-"))
        if alias is not None:
            return cls[alias]
        logger.debug("Rejected %s value %r", cls.__name__, raw)
        raise ValueError(f"unknown {cls.__name__}: {raw!r}")


class ComponentKind(_TaggedEnum):
    """Interface patch types Data can use against the Tholian interface."""

    CEREBRAL_CORTEX_PATCH = "CerebralCortexPatch"
    TEMPORAL_INTERFACE_PATCH = "TemporalInterfacePatch"
    FRONTAL_INTERFACE_PATCH = "FrontalInterfacePatch"

    @classmethod
    def _aliases(cls) -> dict:
        return {
            "cerebral": "CEREBRAL_CORTEX_PATCH",
            "cerebral-cortex": "CEREBRAL_CORTEX_PATCH",
            "temporal": "TEMPORAL_INTERFACE_PATCH",
            "frontal": "FRONTAL_INTERFACE_PATCH",
        }


class ConnectionState(_TaggedEnum):
    ENABLED = "ActiveConnectionEnabled"
    NOT_ENABLED = "ActiveConnectionNotEnabled"

    @classmethod
    def _aliases(cls) -> dict:
        return {"enabled": "ENABLED", "not-enabled": "NOT_ENABLED", "disabled": "NOT_ENABLED"}
