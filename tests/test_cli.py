from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

from typer.testing import CliRunner

from wacohft.cli import app
from wacohft.recording import load_recording
from wacohft.session import Wdf6m200

FRAME = b"0" + b"0064" * 3 + b"00C8" * 3 + b"\r\n"

runner = CliRunner()


class FakeSerialPort:
    def __init__(self, frames: list[bytes]):
        self._frames = frames
        self.closed = False

    def read(self, size: int) -> bytes:
        return self._frames.pop(0) if self._frames else b""

    def write(self, data: bytes) -> int:
        return len(data)

    def close(self) -> None:
        self.closed = True


def patch_open(monkeypatch, port: FakeSerialPort) -> None:
    def fake_open(timeout, settings=None, sensitivity=None):
        return Wdf6m200(port, sensitivity)

    monkeypatch.setattr(Wdf6m200, "open", fake_open)


def test_run_calibrates_and_records(monkeypatch, tmp_path: Path) -> None:
    port = FakeSerialPort([FRAME] * 4)
    patch_open(monkeypatch, port)
    out = tmp_path / "wrench.csv"

    result = runner.invoke(
        app, ["run", "--count", "2", "--samples", "2", "--period", "0", "--out", str(out)]
    )

    assert result.exit_code == 0, result.output
    assert "Calibration done!" in result.output
    assert "[2/2] force=(+0.0000, +0.0000, +0.0000) N" in result.output
    assert port.closed
    df = load_recording(out)
    assert len(df) == 2
    assert df[["fx", "fy", "fz", "tx", "ty", "tz"]].abs().to_numpy().max() < 1e-12


def test_run_keeps_polling_after_errors(monkeypatch) -> None:
    port = FakeSerialPort([FRAME, b"short", FRAME])
    patch_open(monkeypatch, port)

    result = runner.invoke(app, ["run", "--count", "2", "--samples", "1", "--period", "0"])

    assert result.exit_code == 0, result.output
    assert "[1/2]" in result.output
    assert "[2/2]" in result.output


def test_ports_lists_matching_devices(monkeypatch) -> None:
    infos = [
        SimpleNamespace(device="/dev/ttyUSB0", vid=0x10C4, pid=0xEA60),
        SimpleNamespace(device="/dev/ttyACM0", vid=0x2341, pid=0x0043),
    ]
    monkeypatch.setattr(
        "wacohft.transport.list_ports", SimpleNamespace(comports=lambda: list(infos))
    )

    result = runner.invoke(app, ["ports"])

    assert result.exit_code == 0
    assert result.output.strip() == "/dev/ttyUSB0"


def test_ports_reports_missing_sensor(monkeypatch) -> None:
    monkeypatch.setattr("wacohft.transport.list_ports", SimpleNamespace(comports=lambda: []))

    result = runner.invoke(app, ["ports"])

    assert result.exit_code == 1
    assert "No sensor found" in result.output
