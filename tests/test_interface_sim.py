"""Simulation tests for the Tholian interface and its adapter."""
from __future__ import annotations

import io
import unittest
from datetime import datetime, timedelta
from typing import Iterable, List

from neurolink.interface import (
    AdaptedInterface,
    ConnectionConfig,
    DelayProfile,
    TholianInterface,
    format_duration,
    format_rate,
    open_interface,
)
from neurolink.models import ComponentKind
from neurolink.runner import run_demo

BASE_LINES = [
    "Initializing Tholian Neural Interface Connection Parameters , please wait------ ",
    "Parameters initialized, loading neural pathway interfaces, please wait------ ",
    "Pathway interfaces loaded; waiting for connection from client neural interface----- ",
]


class _FakeClock:
    """Returns ``start`` and then advances by ``step`` on every call."""

    def __init__(self, step: timedelta) -> None:
        self._now = datetime(2024, 1, 1, 12, 0, 0)
        self._step = step

    def __call__(self) -> datetime:
        now = self._now
        self._now = now + self._step
        return now


class _Harness:
    def __init__(self, step: timedelta = timedelta(seconds=21)) -> None:
        self.stream = io.StringIO()
        self.sleeps: List[float] = []
        self.config = ConnectionConfig(
            stream=self.stream,
            sleep=self.sleeps.append,
            clock=_FakeClock(step),
        )

    def lines(self) -> List[str]:
        return [line for line in self.stream.getvalue().split("\n") if line]


def _adapted_lines(kind: str, rate: str, packets: str, duration: str) -> List[str]:
    return BASE_LINES + [
        f"Connecting to Tholian Neural Interface using: {kind}.  Please wait...",
        f"Connection established.  Data Transfer Rate: {rate} petabytes per nanosecond.",
        f"Receiving packets from Tholian {kind}... please wait...",
        f"Packets received.   Avg Packets Received: {packets} petabytes per nanosecond.",
        f"Connection Duration : {duration}",
        "Session Ended...",
        "Connection Terminated.",
    ]


class TholianInterfaceTest(unittest.TestCase):
    def test_connect_prints_three_lines_with_pauses(self) -> None:
        harness = _Harness()
        result = TholianInterface(harness.config).connect()

        self.assertIsNone(result)
        self.assertEqual(harness.lines(), BASE_LINES)
        self.assertEqual(harness.sleeps, [5.0, 7.0])
        self.assertTrue(harness.stream.getvalue().startswith("\n" + BASE_LINES[0] + "\n"))


class AdaptedInterfaceTest(unittest.TestCase):
    def test_connect_output_for_each_kind(self) -> None:
        expected = {
            ComponentKind.CEREBRAL_CORTEX_PATCH: ("2458.33", "512.88"),
            ComponentKind.TEMPORAL_INTERFACE_PATCH: ("999.878", "726.91"),
            ComponentKind.FRONTAL_INTERFACE_PATCH: ("698.336", "100.3"),
        }
        for kind, (rate, packets) in expected.items():
            with self.subTest(kind=kind):
                harness = _Harness()
                AdaptedInterface(kind, config=harness.config).connect()
                self.assertEqual(harness.lines(), _adapted_lines(str(kind), rate, packets, "00:00:21"))
                self.assertEqual(harness.sleeps, [5.0, 7.0, 3.0, 6.0])

    def test_connect_populates_record(self) -> None:
        harness = _Harness(step=timedelta(seconds=21, microseconds=250))
        adapter = AdaptedInterface(ComponentKind.CEREBRAL_CORTEX_PATCH, config=harness.config)
        record = adapter.connect()

        self.assertIs(adapter.record, record)
        self.assertIs(record.kind, ComponentKind.CEREBRAL_CORTEX_PATCH)
        self.assertEqual(record.transfer_rate, 2458.33)
        self.assertEqual(record.avg_packets_sent, 512.88)
        self.assertEqual(record.message_header, "Cerebral Cortex Patch Header")
        self.assertEqual(record.duration, timedelta(seconds=21, microseconds=250))
        self.assertIn("Connection Duration : 00:00:21.0002500", harness.lines())

    def test_adapter_drives_the_given_target(self) -> None:
        calls: List[str] = []

        class _RecordingTarget(TholianInterface):
            def connect(self) -> None:
                calls.append("target")

        harness = _Harness()
        adapter = AdaptedInterface(
            "frontal",
            config=harness.config,
            target=_RecordingTarget(harness.config),
        )
        adapter.connect()

        self.assertEqual(calls, ["target"])
        self.assertEqual(harness.sleeps, [3.0, 6.0])
        self.assertEqual(harness.lines()[0], "Connecting to Tholian Neural Interface using: FrontalInterfacePatch.  Please wait...")

    def test_same_kind_yields_identical_values(self) -> None:
        first = AdaptedInterface(ComponentKind.TEMPORAL_INTERFACE_PATCH, config=_Harness(timedelta(seconds=3)).config).connect()
        second = AdaptedInterface(ComponentKind.TEMPORAL_INTERFACE_PATCH, config=_Harness(timedelta(seconds=9)).config).connect()

        self.assertEqual(first.transfer_rate, second.transfer_rate)
        self.assertEqual(first.avg_packets_sent, second.avg_packets_sent)
        self.assertEqual(first.message_header, second.message_header)
        self.assertNotEqual(first.duration, second.duration)

    def test_unknown_kind_is_rejected_at_construction(self) -> None:
        with self.assertRaises(ValueError):
            AdaptedInterface("OccipitalPatch")


class OpenInterfaceTest(unittest.TestCase):
    def test_selects_variant_explicitly(self) -> None:
        config = _Harness().config
        self.assertIsInstance(open_interface(config=config), TholianInterface)
        adapted = open_interface(ComponentKind.FRONTAL_INTERFACE_PATCH, config=config)
        self.assertIsInstance(adapted, AdaptedInterface)
        self.assertIs(adapted.config, config)


class RunDemoTest(unittest.TestCase):
    def _kinds(self, records: Iterable) -> List[ComponentKind]:
        return [record.kind for record in records]

    def test_runs_every_kind_in_order(self) -> None:
        harness = _Harness()
        records = run_demo(config=harness.config)

        self.assertEqual(self._kinds(records), list(ComponentKind))
        self.assertEqual(len(harness.lines()), 3 * len(_adapted_lines("x", "0", "0", "0")))
        self.assertEqual(harness.sleeps, [5.0, 7.0, 3.0, 6.0] * 3)

    def test_selected_kinds_and_plain_run(self) -> None:
        harness = _Harness()
        records = run_demo(["frontal"], config=harness.config, plain=True)

        self.assertEqual(self._kinds(records), [ComponentKind.FRONTAL_INTERFACE_PATCH])
        self.assertEqual(harness.lines()[:3], BASE_LINES)
        self.assertEqual(harness.lines()[3:6], BASE_LINES)

    def test_empty_selection_connects_nothing(self) -> None:
        harness = _Harness()
        self.assertEqual(run_demo([], config=harness.config), [])
        self.assertEqual(harness.lines(), [])


class DelayProfileTest(unittest.TestCase):
    def test_scaled(self) -> None:
        self.assertEqual(DelayProfile().scaled(0.5), DelayProfile(2.5, 3.5, 1.5, 3.0))
        self.assertEqual(DelayProfile().scaled(0), DelayProfile(0.0, 0.0, 0.0, 0.0))
        with self.assertRaises(ValueError):
            DelayProfile().scaled(-1)
        for factor in (float("inf"), float("nan")):
            with self.subTest(factor=factor), self.assertRaises(ValueError):
                DelayProfile().scaled(factor)

    def test_zero_delays_never_sleep(self) -> None:
        harness = _Harness()
        harness.config.delays = DelayProfile().scaled(0)
        AdaptedInterface(ComponentKind.CEREBRAL_CORTEX_PATCH, config=harness.config).connect()
        self.assertEqual(harness.sleeps, [])


class FormattingTest(unittest.TestCase):
    def test_format_rate(self) -> None:
        self.assertEqual(format_rate(2458.33), "2458.33")
        self.assertEqual(format_rate(100.3), "100.3")
        self.assertEqual(format_rate(0.0), "0")
        self.assertEqual(format_rate(12), "12")

    def test_format_duration(self) -> None:
        self.assertEqual(format_duration(timedelta(seconds=21)), "00:00:21")
        self.assertEqual(format_duration(timedelta(seconds=21, microseconds=123456)), "00:00:21.1234560")
        self.assertEqual(format_duration(timedelta(days=1, hours=2, minutes=3, seconds=4)), "1.02:03:04")
        self.assertEqual(format_duration(-timedelta(seconds=90)), "-00:01:30")


if __name__ == "__main__":
    unittest.main()
