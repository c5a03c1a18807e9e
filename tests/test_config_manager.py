from __future__ import annotations

from pathlib import Path

import pytest

from tagbump.config_manager import ConfigError, explain, load_config


def test_defaults_without_config_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)

    config = load_config(environ={})

    assert config.git.remote == "origin"
    assert config.tagging.message_template == "Bump {kind} version to {version}"
    assert config._metadata.config_path == tmp_path / "tagbump.toml"
    assert config._metadata.env_path is None


def test_explicit_missing_config_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "absent.toml", environ={})


def test_precedence_env_overrides(tmp_path: Path) -> None:
    config_file = tmp_path / "tagbump.toml"
    config_file.write_text('[git]\nremote = "file-remote"\n', encoding="utf-8")
    env_file = tmp_path / ".env"
    env_file.write_text(
        "TAGBUMP__GIT__REMOTE=env-file-remote\nTAGBUMP__TAGGING__TARGET_REF=main\n",
        encoding="utf-8",
    )
    environ = {"TAGBUMP__GIT__REMOTE": "process-remote"}

    config = load_config(config_file, environ=environ)

    assert config.git.remote == "process-remote"
    assert config.tagging.target_ref == "main"
    provenance = config._metadata.provenance
    assert provenance["git.remote"].layer == "env"
    assert provenance["git.remote"].variable == "TAGBUMP__GIT__REMOTE"
    assert provenance["tagging.target_ref"].layer == "env-file"
    assert provenance["app.debug"].layer == "defaults"


def test_file_layer_overrides_defaults(tmp_path: Path) -> None:
    config_file = tmp_path / "tagbump.toml"
    config_file.write_text(
        '[app]\ndebug = true\n\n[logging]\nlevel = "debug"\nfile_path = "logs/tagbump.log"\n',
        encoding="utf-8",
    )

    config = load_config(config_file, environ={})

    assert config.app.debug is True
    assert config.logging.level == "DEBUG"
    assert config.logging.file_path is not None
    assert config.logging.file_path.is_absolute()
    assert config._metadata.provenance["logging.level"].location == str(config_file)


def test_blank_optional_paths_normalized(tmp_path: Path) -> None:
    config_file = tmp_path / "tagbump.toml"
    config_file.write_text('[git]\nworking_dir = ""\n', encoding="utf-8")

    config = load_config(config_file, environ={"TAGBUMP__LOGGING__FILE_PATH": ""})

    assert config.git.working_dir is None
    assert config.logging.file_path is None


def test_validation_errors_report_source(tmp_path: Path) -> None:
    config_file = tmp_path / "tagbump.toml"
    config_file.write_text(
        '[tagging]\nmessage_template = "Bump {unknown}"\n', encoding="utf-8"
    )

    with pytest.raises(ConfigError) as excinfo:
        load_config(config_file, environ={})

    assert "tagging.message_template" in str(excinfo.value)
    assert "file" in str(excinfo.value)


def test_unknown_keys_are_rejected(tmp_path: Path) -> None:
    config_file = tmp_path / "tagbump.toml"
    config_file.write_text("", encoding="utf-8")

    with pytest.raises(ConfigError, match="git.remotes") as excinfo:
        load_config(config_file, environ={"TAGBUMP__GIT__REMOTES": "x"})

    assert "TAGBUMP__GIT__REMOTES" in str(excinfo.value)


def test_malformed_toml_raises_config_error(tmp_path: Path) -> None:
    config_file = tmp_path / "tagbump.toml"
    config_file.write_text("[git\nremote = 1\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(config_file, environ={})



def test_numeric_looking_env_values_stay_text_for_string_fields(tmp_path: Path) -> None:
    config_file = tmp_path / "tagbump.toml"
    config_file.write_text("", encoding="utf-8")
    environ = {
        "TAGBUMP__TAGGING__TARGET_REF": "1234567",
        "TAGBUMP__GIT__REMOTE": "2024",
        "TAGBUMP__LOGGING__MAX_FILE_SIZE_MB": "5",
        "TAGBUMP__APP__DEBUG": "true",
    }

    config = load_config(config_file, environ=environ)

    assert config.tagging.target_ref == "1234567"
    assert config.git.remote == "2024"
    assert config.logging.max_file_size_mb == 5
    assert config.app.debug is True


def test_explain_names_the_layer(tmp_path: Path) -> None:
    config_file = tmp_path / "tagbump.toml"
    config_file.write_text('[git]\nremote = "mirror"\n', encoding="utf-8")

    config = load_config(config_file, environ={"TAGBUMP__TAGGING__TARGET_REF": "main"})

    assert explain(config, "git.remote").splitlines() == [
        'git.remote = "mirror"',
        f"source: file ({config_file})",
    ]
    assert "TAGBUMP__TAGGING__TARGET_REF" in explain(config, "tagging.target_ref")
    with pytest.raises(ConfigError, match="Unknown configuration key"):
        explain(config, "git.nope")
