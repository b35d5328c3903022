from __future__ import annotations

import pytest

from core.config import load_settings
from core.domain.errors import ConfigurationError

_REQUIRED = ("PDF_OTTER_API_KEY", "PDF_OTTER_ENDPOINT", "MONGO_CONN_STR", "MONGO_DATABASE")


@pytest.fixture
def full_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PDF_OTTER_API_KEY", "k")
    monkeypatch.setenv("PDF_OTTER_ENDPOINT", "https://api.pdfotter.test")
    monkeypatch.setenv("MONGO_CONN_STR", "mongodb://localhost:27017")
    monkeypatch.setenv("MONGO_DATABASE", "db")
    for name in ("MONGO_COLLECTION", "PDF_OTTER_BATCH_SIZE", "PDF_OTTER_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)


def test_loads_required_variables_and_defaults(full_env: None) -> None:
    settings = load_settings(_env_file=None)

    assert settings.pdf_otter_api_key == "k"
    assert settings.pdf_otter_endpoint == "https://api.pdfotter.test"
    assert settings.mongo_database == "db"
    assert settings.mongo_collection == "pdfOtter"
    assert settings.pdf_otter_batch_size == 3


def test_all_missing_variables_are_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _REQUIRED:
        monkeypatch.delenv(name, raising=False)

    with pytest.raises(ConfigurationError) as excinfo:
        load_settings(_env_file=None)

    assert sorted(excinfo.value.details["missing"]) == sorted(_REQUIRED)
    for name in _REQUIRED:
        assert name in excinfo.value.message


def test_empty_variable_counts_as_missing(full_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MONGO_CONN_STR", "")

    with pytest.raises(ConfigurationError) as excinfo:
        load_settings(_env_file=None)

    assert excinfo.value.details["missing"] == ["MONGO_CONN_STR"]


def test_batch_size_override_from_env(full_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PDF_OTTER_BATCH_SIZE", "5")

    assert load_settings(_env_file=None).pdf_otter_batch_size == 5


def test_invalid_batch_size_is_a_configuration_error(full_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PDF_OTTER_BATCH_SIZE", "0")

    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        load_settings(_env_file=None)
