"""Run a countdown in the terminal: python -m paneltimer 25m."""

from __future__ import annotations

import logging
import signal
import sys
from contextlib import contextmanager

import click

from .settings import load_settings
from .timer.engine import CountdownEngine, TimerObserver
from .timer.parser import format_hms, parse_duration

_LOGGER = logging.getLogger(__name__)


class ConsoleObserver(TimerObserver):
    """Rewrites a single terminal line, like the panel label would."""

    def __init__(self, on_done=None, *, done_on_finish: bool = True) -> None:
        self._on_done = on_done
        self._done_on_finish = done_on_finish

    def on_tick(self, formatted_time: str) -> None:
        click.echo(f"\r{formatted_time}", nl=False)

    def on_status_text(self, label: str) -> None:
        click.echo(f"\r{label:<8}", nl=False)

    def on_finished(self) -> None:
        click.echo("\nTime's up!")
        if self._on_done is not None and self._done_on_finish:
            self._on_done()

    def on_stopped(self) -> None:
        click.echo("")
        if self._on_done is not None:
            self._on_done()


@click.command()
@click.argument("duration", nargs=-1, required=True)
@click.option("--check", is_flag=True, help="Only print the parsed duration.")
@click.option("--no-sound", is_flag=True, help="Do not ring the alarm.")
@click.option("--volume", type=click.IntRange(0, 100), default=None,
              help="Alarm volume, 0-100.")
@click.option("--alarm-seconds", type=click.IntRange(1), default=None,
              help="How long the alarm rings.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
def cli(duration, check, no_sound, volume, alarm_seconds, verbose):
    """Count down DURATION (e.g. 1h 2m 3s) and ring an alarm at zero."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    text = " ".join(duration)
    seconds = parse_duration(text)
    if seconds <= 0:
        raise click.BadParameter(
            f"no duration in {text!r}; use e.g. 1h 2m 3s",
            param_hint="DURATION",
        )

    if check:
        click.echo(f"{seconds} {format_hms(seconds)}")
        return

    settings = load_settings()
    _LOGGER.debug("Loaded settings: %s", settings)
    if no_sound:
        settings.sound_enabled = False
    if volume is not None:
        settings.sound_volume = volume
    if alarm_seconds is not None:
        settings.alarm_seconds = alarm_seconds

    sys.exit(_run(text, settings))


@contextmanager
def _sigint_handler(handler):
    """Install *handler* for Ctrl+C, restoring the previous one on exit."""
    previous = signal.signal(signal.SIGINT, handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def _run(text, settings) -> int:
    from PyQt6.QtCore import QCoreApplication, QTimer

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    app.setApplicationName("PanelTimer")

    alarm = None
    if settings.sound_enabled:
        from .audio.alarm import AlarmPlayer

        alarm = AlarmPlayer(
            alarm_seconds=settings.alarm_seconds,
            sound_file=settings.alarm_file,
        )
        alarm.set_volume(settings.sound_volume)
        alarm.silenced.connect(app.quit)
        # Keep running until the alarm has been silenced.
        observer = ConsoleObserver(on_done=app.quit, done_on_finish=False)
    else:
        observer = ConsoleObserver(on_done=app.quit)

    engine = CountdownEngine(observer, alarm=alarm)

    def _interrupt(*_args):
        engine.stop()
        app.quit()

    # Hand control back to Python regularly so Ctrl+C is noticed.
    wakeup = QTimer()
    wakeup.timeout.connect(lambda: None)
    wakeup.start(250)

    with _sigint_handler(_interrupt):
        engine.start(text)
        try:
            return app.exec()
        finally:
            wakeup.stop()
            engine.destroy()


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
