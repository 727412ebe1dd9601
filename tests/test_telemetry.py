from __future__ import annotations

import pytest

from line_editor.runtime import telemetry


def test_env_helpers_use_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LINE_EDITOR_SAMPLE_FLAG", "Yes")
    monkeypatch.setenv("LINE_EDITOR_SAMPLE_VALUE", "abc")

    assert telemetry.env("SAMPLE_VALUE") == "abc"
    assert telemetry.env("MISSING_VALUE", "fallback") == "fallback"
    assert telemetry.env_flag("SAMPLE_FLAG", False) is True
    assert telemetry.env_flag("MISSING_FLAG", True) is True


def test_configure_rejects_config_and_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError, match="Unknown telemetry preset"):
        telemetry.configure(preset="verbose")


@pytest.mark.parametrize("preset", ["performance_analysis", "vim"])
def test_configure_accepts_only_cli_presets(preset: str) -> None:
    with pytest.raises(ValueError, match="Unknown telemetry preset"):
        telemetry.configure(preset=preset)


def test_get_logger_is_cached() -> None:
    telemetry.configure(console=False)

    assert telemetry.get_logger("line_editor.test") is telemetry.get_logger(
        "line_editor.test"
    )


def test_record_event_rejects_unknown_level() -> None:
    telemetry.configure(console=False)

    with pytest.raises(ValueError, match="Unsupported log level"):
        telemetry.record_event("sample", level="shout")


def test_span_reraises_and_yields_handle() -> None:
    telemetry.configure(console=False)

    with telemetry.span("test::ok", metadata={"key": 1}) as handle:
        handle.add_metadata("rows", [1, 2])
    assert handle.metadata == {"key": "1", "rows": "[1, 2]"}

    with pytest.raises(KeyError):
        with telemetry.span("test::boom", component=True):
            raise KeyError("boom")
