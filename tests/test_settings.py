import pytest

from livecode_engine.runtime import EngineSettings


def test_defaults() -> None:
    settings = EngineSettings()

    assert settings.timeout_ms == 5000
    assert settings.max_output_entries == 1000
    assert settings.language == "python"
    assert settings.theme == "dark"
    assert settings.wrapper_lines == 0


def test_from_env_reads_prefixed_variables() -> None:
    settings = EngineSettings.from_env(
        {
            "LIVECODE_TIMEOUT_MS": "250",
            "LIVECODE_MAX_OUTPUT": "10",
            "LIVECODE_LANGUAGE": "JavaScript",
            "LIVECODE_THEME": "light",
            "LIVECODE_WRAPPER_LINES": "0",
        }
    )

    assert settings == EngineSettings(
        timeout_ms=250,
        max_output_entries=10,
        language="javascript",
        theme="light",
        wrapper_lines=0,
    )


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LIVECODE_TIMEOUT_MS", "900")

    settings = EngineSettings.from_env(timeout_ms=100)

    assert settings.timeout_ms == 100


@pytest.mark.parametrize("raw", ["soon", "0", "-5"])
def test_from_env_rejects_bad_timeouts(raw: str) -> None:
    with pytest.raises(ValueError):
        EngineSettings.from_env({"LIVECODE_TIMEOUT_MS": raw})


def test_direct_construction_validates() -> None:
    with pytest.raises(ValueError):
        EngineSettings(max_output_entries=0)
