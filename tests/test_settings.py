from __future__ import annotations

import pytest

from objstore.exceptions import ConfigurationError
from objstore.settings import Settings, StorageSettings, get_settings
from objstore.storage import build_storage
from objstore.storage.local import LocalStorage
from objstore.storage.recording import RecordingStorage


def _write(path, text: str):
    path.write_text(text, encoding="utf-8")
    return path


def test_load_from_yaml(tmp_path):
    config = _write(
        tmp_path / "settings.yaml",
        """
storage:
  backend: local
  region: eu-central-1
  profile: ""
  local_root: /var/lib/objstore
logging:
  level: debug
  json_format: true
""",
    )

    settings = Settings.load(config)

    assert settings.storage.backend == "local"
    assert settings.storage.region == "eu-central-1"
    assert settings.storage.profile is None
    assert settings.storage.server_side_encryption == "AES256"
    assert settings.logging.level == "DEBUG"
    assert settings.logging.json_format is True


def test_empty_file_gives_defaults(tmp_path):
    settings = Settings.load(_write(tmp_path / "empty.yaml", ""))

    assert settings.storage.backend == "s3"
    assert settings.logging.level == "INFO"


def test_missing_file_raises_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError) as exc_info:
        Settings.load(tmp_path / "absent.yaml")

    assert exc_info.value.details["path"] == str(tmp_path / "absent.yaml")


@pytest.mark.parametrize(
    "text",
    [
        "storage:\n  backend: ftp\n",
        "logging:\n  level: LOUD\n",
        "storage: [1, 2]\n",
        "storage: {backend: s3\n",
    ],
    ids=["bad-backend", "bad-level", "wrong-type", "bad-yaml"],
)
def test_invalid_content_raises_configuration_error(tmp_path, text):
    with pytest.raises(ConfigurationError):
        Settings.load(_write(tmp_path / "bad.yaml", text))


def test_env_var_selects_config(tmp_path, monkeypatch):
    config = _write(tmp_path / "env.yaml", "storage:\n  backend: recording\n")
    monkeypatch.setenv("OBJSTORE_CONFIG", str(config))
    get_settings.cache_clear()

    try:
        assert get_settings().storage.backend == "recording"
    finally:
        get_settings.cache_clear()


def test_client_config_mapping():
    storage = StorageSettings(
        region="us-west-2",
        profile="deploy",
        endpoint_url="http://localhost:9000",
        server_side_encryption="",
    )

    config = storage.client_config()

    assert config.region == "us-west-2"
    assert config.profile == "deploy"
    assert config.endpoint_url == "http://localhost:9000"
    assert config.server_side_encryption is None


def test_build_storage_local(tmp_path):
    storage = build_storage(StorageSettings(backend="local", local_root=str(tmp_path / "root")))

    assert isinstance(storage, LocalStorage)
    assert (tmp_path / "root").is_dir()


def test_build_storage_recording():
    assert isinstance(build_storage(StorageSettings(backend="recording")), RecordingStorage)


def test_build_storage_unknown_backend():
    settings = StorageSettings.model_construct(backend="ftp")

    with pytest.raises(ConfigurationError):
        build_storage(settings)
