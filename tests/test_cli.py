from gaze_unlock.__main__ import EXIT_FAILED, EXIT_TIMEOUT, EXIT_UNLOCKED, main, parse_args


def test_parse_args_defaults():
    args = parse_args([])
    assert not args.dummy and not args.tobii and not args.calibrate
    assert args.timeout == 60.0


def test_dummy_run_unlocks(monkeypatch):
    monkeypatch.setenv("GAZE_UNLOCK__UNLOCK__DWELL_THRESHOLD_MS", "100")
    monkeypatch.setenv("GAZE_UNLOCK__DUMMY__FREQUENCY_HZ", "50")
    monkeypatch.setenv("GAZE_UNLOCK__UNLOCK__REDIRECT_DELAY_MS", "0")

    assert main(["--dummy", "--timeout", "20"]) == EXIT_UNLOCKED


def test_dummy_run_times_out(monkeypatch):
    # The simulated user never completes a dwell shorter than its fixation.
    monkeypatch.setenv("GAZE_UNLOCK__UNLOCK__DWELL_THRESHOLD_MS", "100000")

    assert main(["--dummy", "--timeout", "0.2"]) == EXIT_TIMEOUT


def test_configuration_error_exits(monkeypatch, capsys):
    monkeypatch.setenv("GAZE_UNLOCK__UNLOCK__ZONE_PERCENT", "5")

    assert main(["--dummy"]) == EXIT_FAILED
    assert "Configuration Error" in capsys.readouterr().out


def test_unknown_logging_level_exits_cleanly(monkeypatch, capsys):
    monkeypatch.setenv("GAZE_UNLOCK__LOGGING__LEVEL", "FOO")

    assert main(["--dummy"]) == EXIT_FAILED
    assert "Configuration Error" in capsys.readouterr().out
