"""Tests for the command-line runner (paths that do not start a Qt loop)."""

import signal

import pytest
from click.testing import CliRunner

from paneltimer.__main__ import cli, ConsoleObserver, _sigint_handler


@pytest.fixture
def runner():
    return CliRunner()


class TestCheck:
    def test_prints_seconds_and_hms(self, runner):
        result = runner.invoke(cli, ["--check", "1h 2m 3s"])
        assert result.exit_code == 0
        assert result.output.strip() == "3723 01:02:03"

    def test_words_are_joined(self, runner):
        result = runner.invoke(cli, ["--check", "1h", "30m"])
        assert result.exit_code == 0
        assert result.output.strip() == "5400 01:30:00"


class TestInvalidDuration:
    @pytest.mark.parametrize("arg", ["abc", "0s", "5 minutes"])
    def test_usage_error(self, runner, arg):
        result = runner.invoke(cli, [arg])
        assert result.exit_code == 2
        assert "no duration" in result.output

    def test_missing_argument(self, runner):
        result = runner.invoke(cli, [])
        assert result.exit_code == 2

    def test_volume_out_of_range(self, runner):
        result = runner.invoke(cli, ["--volume", "150", "5s"])
        assert result.exit_code == 2


class TestConsoleObserver:
    def test_tick_rewrites_line(self, capsys):
        ConsoleObserver().on_tick("00:00:05")
        assert capsys.readouterr().out == "\r00:00:05"

    def test_finish_calls_done(self):
        calls = []
        obs = ConsoleObserver(on_done=lambda: calls.append(True))
        obs.on_finished()
        assert calls == [True]

    def test_finish_waits_for_alarm(self):
        calls = []
        obs = ConsoleObserver(on_done=lambda: calls.append(True), done_on_finish=False)
        obs.on_finished()
        assert calls == []
        obs.on_stopped()
        assert calls == [True]


class TestSigintHandler:
    def test_installs_and_restores(self):
        before = signal.getsignal(signal.SIGINT)

        def handler(*_args):
            pass

        with _sigint_handler(handler):
            assert signal.getsignal(signal.SIGINT) is handler
        assert signal.getsignal(signal.SIGINT) is before

    def test_restores_after_error(self):
        before = signal.getsignal(signal.SIGINT)
        with pytest.raises(RuntimeError):
            with _sigint_handler(lambda *_args: None):
                raise RuntimeError("loop failed")
        assert signal.getsignal(signal.SIGINT) is before
