"""Tests for settings loading and path resolution."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from app.config import AppConfig, load_config


def test_defaults_when_files_missing(tmp_path):
    cfg = load_config(settings_path=tmp_path / "photoupload.settings.yaml")
    assert cfg.storage.backend == "local"
    assert cfg.storage.public_base_url is None
    assert cfg.server.port == 8000
    assert cfg.logging.level == "info"
    assert cfg.secrets.aws.access_key_id is None


def test_settings_and_secrets_merged(tmp_path):
    settings_file = tmp_path / "photoupload.settings.yaml"
    settings_file.write_text(
        "storage:\n"
        "  backend: s3\n"
        "  bucket: holiday-photos\n"
        "  region: eu-west-1\n"
        "  public_base_url: https://cdn.example.com\n"
        "logging:\n"
        "  level: DEBUG\n",
        encoding="utf-8",
    )
    (tmp_path / "photoupload.secrets.yaml").write_text(
        "aws:\n"
        "  access_key_id: AKIAFAKE\n"
        "  secret_access_key: fake-secret\n",
        encoding="utf-8",
    )

    cfg = load_config(settings_path=settings_file)
    assert cfg.storage.backend == "s3"
    assert cfg.storage.bucket == "holiday-photos"
    assert cfg.storage.public_base_url == "https://cdn.example.com"
    assert cfg.logging.level == "debug"
    assert cfg.secrets.aws.access_key_id == "AKIAFAKE"


def test_local_dir_relative_to_project_root_when_settings_in_config_dir(tmp_path):
    """Relative local_dir resolves from project root for ./config layout."""
    project_root = tmp_path / "project"
    config_dir = project_root / "config"
    config_dir.mkdir(parents=True)
    settings_file = config_dir / "photoupload.settings.yaml"
    settings_file.write_text("storage:\n  local_dir: data/uploads\n", encoding="utf-8")

    cfg = load_config(settings_path=settings_file)
    assert Path(cfg.storage.local_dir) == project_root.resolve() / "data" / "uploads"


def test_local_dir_relative_to_settings_dir_otherwise(tmp_path):
    settings_file = tmp_path / "photoupload.settings.yaml"
    settings_file.write_text("storage:\n  local_dir: media\n", encoding="utf-8")

    cfg = load_config(settings_path=settings_file)
    assert Path(cfg.storage.local_dir) == tmp_path.resolve() / "media"


def test_local_dir_absolute_unchanged(tmp_path):
    absolute = tmp_path / "absolute" / "uploads"
    settings_file = tmp_path / "photoupload.settings.yaml"
    settings_file.write_text(f"storage:\n  local_dir: {absolute}\n", encoding="utf-8")

    cfg = load_config(settings_path=settings_file)
    assert Path(cfg.storage.local_dir) == absolute


def test_unknown_backend_rejected():
    with pytest.raises(ValidationError):
        AppConfig(storage={"backend": "ftp"})


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        AppConfig(logging={"level": "chatty"})


def test_upload_defaults():
    cfg = AppConfig()
    assert cfg.uploads.field_name == "files"
    assert cfg.uploads.path == "/api/upload"
    assert cfg.uploads.client_timeout_seconds == 30.0


def test_upload_settings_from_yaml(tmp_path):
    settings_file = tmp_path / "photoupload.settings.yaml"
    settings_file.write_text(
        "uploads:\n"
        "  field_name: photos\n"
        "  path: /v2/photos\n"
        "  client_timeout_seconds: 5\n",
        encoding="utf-8",
    )

    cfg = load_config(settings_path=settings_file)
    assert cfg.uploads.field_name == "photos"
    assert cfg.uploads.path == "/v2/photos"
    assert cfg.uploads.client_timeout_seconds == 5.0


def test_relative_upload_path_rejected():
    with pytest.raises(ValidationError):
        AppConfig(uploads={"path": "api/upload"})
