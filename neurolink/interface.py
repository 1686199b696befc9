"""The Tholian neural interface and the adapter that lets Data use it."""
from __future__ import annotations

import contextlib
import logging
import math
import sys
import time
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Callable, Optional, Protocol, TextIO

from neurolink.legacy import KindLike, LegacyInterfaceLookup
from neurolink.metrics import ConnectionLog
from neurolink.models import ComponentKind, ConnectionRecord, ConnectionState

logger = logging.getLogger(__name__)

INITIALIZING = "Initializing Tholian Neural Interface Connection Parameters , please wait------ "
PARAMETERS_READY = "Parameters initialized, loading neural pathway interfaces, please wait------ "
PATHWAYS_LOADED = "Pathway interfaces loaded; waiting for connection from client neural interface----- "

CONNECTING = "Connecting to Tholian Neural Interface using: {kind}.  Please wait..."
ESTABLISHED = "Connection established.  Data Transfer Rate: {rate} petabytes per nanosecond."
RECEIVING = "Receiving packets from Tholian {kind}... please wait..."
RECEIVED = "Packets received.   Avg Packets Received: {packets} petabytes per nanosecond."
TERMINATED = "Connection Duration : {duration}\nSession Ended...\nConnection Terminated."

_TICKS_PER_SECOND = 10_000_000


@dataclass(frozen=True, slots=True)
class DelayProfile:
	"""Pauses, in seconds, between the scripted status lines."""

	initialize: float = 5.0
	load_pathways: float = 7.0
	handshake: float = 3.0
	receive: float = 6.0

	def scaled(self, factor: float) -> "DelayProfile":
		if not math.isfinite(factor) or factor < 0:
			raise ValueError(f"delay scale must be a finite, non-negative number, got {factor}")
		return replace(
			self,
			initialize=self.initialize * factor,
			load_pathways=self.load_pathways * factor,
			handshake=self.handshake * factor,
			receive=self.receive * factor,
		)


@dataclass(slots=True)
class ConnectionConfig:
	"""Configuration bundle shared by both interface variants.

	``stream`` defaults to whatever ``sys.stdout`` is at write time.
	"""

	delays: DelayProfile = field(default_factory=DelayProfile)
	stream: Optional[TextIO] = None
	sleep: Callable[[float], None] = time.sleep
	clock: Callable[[], datetime] = datetime.now
	log: Optional[ConnectionLog] = None


def format_rate(value: float) -> str:
	"""Shortest round-trip text for ``value``, without a trailing ``.0``."""
	text = repr(float(value))
	if text.endswith(".0"):
		text = text[:-2]
	return text


def format_duration(duration: timedelta) -> str:
	"""Render ``duration`` as ``[-][d.]hh:mm:ss[.fffffff]``."""
	micros = (duration.days * 86_400 + duration.seconds) * 1_000_000 + duration.microseconds
	sign = "-" if micros < 0 else ""
	ticks = abs(micros) * 10
	seconds, fraction = divmod(ticks, _TICKS_PER_SECOND)
	minutes, secs = divmod(seconds, 60)
	hours, mins = divmod(minutes, 60)
	days, hrs = divmod(hours, 24)
	text = f"{hrs:02d}:{mins:02d}:{secs:02d}"
	if days:
		text = f"{days}.{text}"
	if fraction:
		text = f"{text}.{fraction:07d}"
	return sign + text


class NeuralInterface(Protocol):
	def connect(self) -> Optional[ConnectionRecord]:
		...


class _Console:
	"""Writes status lines the way the interfaces announce themselves."""

	def __init__(self, config: ConnectionConfig) -> None:
		self.config = config

	def line(self, text: str) -> None:
		stream = self.config.stream or sys.stdout
		stream.write(f"\n{text}\n")
		stream.flush()

	def pause(self, seconds: float) -> None:
		if seconds > 0:
			self.config.sleep(seconds)

	def event(self, name: str, value: Optional[float] = None) -> None:
		if not self.config.log:
			return
		try:
			self.config.log.log(name, status="ok", value=value)
		except OSError:
			logger.debug("Connection log write failed for %s", name, exc_info=True)


class TholianInterface:
	"""The target interface: announces itself and waits for a client."""

	def __init__(self, config: Optional[ConnectionConfig] = None) -> None:
		self.config = config or ConnectionConfig()
		self._console = _Console(self.config)

	def connect(self) -> None:
		delays = self.config.delays
		logger.debug("Initializing Tholian interface (delays=%s)", delays)
		self._console.line(INITIALIZING)
		self._console.pause(delays.initialize)
		self._console.line(PARAMETERS_READY)
		self._console.pause(delays.load_pathways)
		self._console.line(PATHWAYS_LOADED)
		self._console.event("pathways_loaded")


class AdaptedInterface:
	"""Drives a :class:`TholianInterface` with values from Data's legacy interface."""

	def __init__(
		self,
		kind: KindLike,
		*,
		config: Optional[ConnectionConfig] = None,
		target: Optional[TholianInterface] = None,
		legacy: Optional[LegacyInterfaceLookup] = None,
	) -> None:
		self.kind = ComponentKind.parse(kind)
		self.config = config or ConnectionConfig()
		self.target = target or TholianInterface(self.config)
		self.legacy = legacy or LegacyInterfaceLookup()
		self.record: Optional[ConnectionRecord] = None
		self._console = _Console(self.config)

	def connect(self) -> ConnectionRecord:
		log = self.config.log
		scope = log.timer("connect", self.kind) if log else contextlib.nullcontext()
		with scope:
			return self._connect()

	def _connect(self) -> ConnectionRecord:
		clock = self.config.clock
		delays = self.config.delays
		kind = self.kind
		started = clock()

		self.target.connect()

		record = ConnectionRecord(kind)
		record.transfer_rate = self.legacy.transfer_rate(kind)
		# Always queried as enabled; the handshake never checks the real state.
		record.avg_packets_sent = self.legacy.packets_sent_rate(kind, ConnectionState.ENABLED)
		record.message_header = self.legacy.message_header(kind, ConnectionState.ENABLED)
		self.record = record

		self._console.line(CONNECTING.format(kind=kind))
		self._console.pause(delays.handshake)
		self._console.line(ESTABLISHED.format(rate=format_rate(record.transfer_rate)))
		self._console.event("transfer_rate", record.transfer_rate)

		self._console.line(RECEIVING.format(kind=kind))
		self._console.pause(delays.receive)
		self._console.line(RECEIVED.format(packets=format_rate(record.avg_packets_sent)))
		self._console.event("packets_received", record.avg_packets_sent)

		record.duration = clock() - started
		self._console.line(TERMINATED.format(duration=format_duration(record.duration)))
		logger.debug("Adapted connection for %s finished in %s", kind, record.duration)
		return record


def open_interface(
	kind: Optional[KindLike] = None,
	*,
	config: Optional[ConnectionConfig] = None,
) -> NeuralInterface:
	"""Pick the plain target when ``kind`` is None, otherwise the adapted one."""
	if kind is None:
		return TholianInterface(config)
	return AdaptedInterface(kind, config=config)


__all__ = [
	"AdaptedInterface",
	"ConnectionConfig",
	"DelayProfile",
	"NeuralInterface",
	"TholianInterface",
	"format_duration",
	"format_rate",
	"open_interface",
]
