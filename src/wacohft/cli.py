"""Command line interface for the wacohft package."""
from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

import typer

from .config import SensorConfig, load_config
from .errors import SensorError
from .recording import CsvRecorder, wrench_metadata
from .session import Wdf6m200
from .transport import list_sensor_ports

logger = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    help="WDF-6M200 force/torque sensor utilities.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load(config_path: Optional[Path], override: Optional[list[str]]) -> SensorConfig:
    try:
        return load_config(config_path, override or None)
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(f"Invalid configuration: {exc}") from exc


@app.command()
def ports(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to sensor config JSON."),
    override: Optional[list[str]] = typer.Option(None, "--set", help="Override config keys, e.g. --set serial.vendor_id=0x10C4"),
) -> None:
    """List serial ports whose USB ids match the sensor."""

    cfg = _load(config_path, override)
    matches = list_sensor_ports(cfg.serial)
    if not matches:
        typer.echo(f"No sensor found (vid=0x{cfg.serial.vendor_id:04X}, pid=0x{cfg.serial.product_id:04X})")
        raise typer.Exit(code=1)
    for device in matches:
        typer.echo(device)


@app.command()
def run(
    count: int = typer.Option(1000, "--count", "-n", min=1, help="Number of measurements to take."),
    period: Optional[float] = typer.Option(None, "--period", help="Polling period in seconds (default: calibration.period_sec)."),
    samples: Optional[int] = typer.Option(None, "--samples", min=1, help="Calibration sample count (default: calibration.samples)."),
    port: Optional[str] = typer.Option(None, "--port", "-p", help="Serial device, skips USB id discovery."),
    out: Optional[Path] = typer.Option(None, "--out", help="Write corrected measurements to this CSV."),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to sensor config JSON."),
    override: Optional[list[str]] = typer.Option(
        None,
        "--set",
        help="Override config keys, e.g. --set serial.timeout=0.05 --set calibration.samples=200",
    ),
) -> None:
    """Zero the sensor, then poll it and print bias-corrected wrenches."""

    cfg = _load(config_path, override)
    if port:
        cfg.serial.port = port
    period_sec = period if period is not None else cfg.calibration.period_sec
    sample_count = samples if samples is not None else cfg.calibration.samples
    output = out or cfg.output_csv
    sensitivity = cfg.sensitivity.build()

    try:
        sensor = Wdf6m200.open(cfg.serial.timeout, settings=cfg.serial, sensitivity=sensitivity)
    except SensorError as exc:
        typer.echo(f"Failed to open sensor: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    recorder = CsvRecorder(output) if output else None
    with sensor:
        typer.echo("Performing calibration. Do not touch the sensor...")
        offset = sensor.calibrate(period_sec, sample_count)
        typer.echo("Calibration done!")
        if recorder:
            recorder.set_metadata(wrench_metadata("offset", offset))

        t0 = time.monotonic()
        try:
            for index in range(count):
                try:
                    sensor.update()
                except SensorError as exc:
                    logger.warning("Update failed: %s", exc)
                wrench = sensor.last_measurement()
                force = ", ".join(f"{float(value):+.4f}" for value in wrench.force)
                torque = ", ".join(f"{float(value):+.5f}" for value in wrench.torque)
                typer.echo(f"[{index + 1}/{count}] force=({force}) N torque=({torque}) N*m")
                if recorder:
                    recorder.append(time.monotonic() - t0, wrench)
                time.sleep(period_sec)
        except KeyboardInterrupt:
            logger.info("Stopping (Ctrl+C)")
        finally:
            if recorder:
                recorder.close()
            stats = sensor.stats()
            logger.info(
                "Final stats: updates=%d frames=%d short_reads=%d short_writes=%d io_errors=%d "
                "encoding_errors=%d length_errors=%d digit_errors=%d",
                stats["updates"],
                stats["frames"],
                stats["short_reads"],
                stats["short_writes"],
                stats["io_errors"],
                stats["encoding_errors"],
                stats["length_errors"],
                stats["digit_errors"],
            )


def run_cli() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    run_cli()
