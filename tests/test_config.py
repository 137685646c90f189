"""Tests for settings loading and container boot."""

from __future__ import annotations

import types
from pathlib import Path

import pydantic as p
import pytest
from ansible.parsing.vault import VaultLib, VaultSecret
from keyctl import KeyNotExistError
from pydantic_settings.sources import SettingsError

from gradeworks.core import GradeworksContainer, Secrets, Settings
from gradeworks.core.config import source
from gradeworks.grading import EligibilityEvaluator, GradeTreeBuilder
from gradeworks.model import DeploymentEnvironment


def _settings(root: Path, env: DeploymentEnvironment, *override: str) -> Settings:
    return Settings(env=env, root=p.FileUrl(f"file://{root}"), override=override)


class TestSettings(object):
    def test_local_reads_root_files(self, config_root: Path) -> None:
        settings = _settings(config_root, DeploymentEnvironment.Local)

        assert settings.grading.max_depth == 8
        assert str(settings.vendor.pinata.api_base_url) == "https://api.pinata.cloud/"
        assert settings.logging.handlers["console"].level == "INFO"

    def test_env_overlay_is_merged(self, config_root: Path) -> None:
        settings = _settings(config_root, DeploymentEnvironment.Test)

        assert str(settings.vendor.pinata.api_base_url) == "https://pinata.test/"
        assert settings.logging.handlers["console"].level == "DEBUG"
        # keys the overlay does not mention survive from the root file
        assert settings.logging.formatters["console"].base == "ext://colorlog.ColoredFormatter"
        assert settings.logging.formatters["console"].no_color

    def test_overrides_apply_last(self, config_root: Path) -> None:
        settings = _settings(
            config_root, DeploymentEnvironment.Test, "grading.max_depth=3", "vendor.pinata.timeout=9.5"
        )

        assert settings.grading.max_depth == 3
        assert settings.vendor.pinata.timeout == 9.5
        assert settings.vendor.pinata.max_file_size_mb == 1

    def test_rejects_malformed_override(self, config_root: Path) -> None:
        with pytest.raises(SettingsError):
            _settings(config_root, DeploymentEnvironment.Local, "grading.max_depth")

    def test_rejects_invalid_values(self, config_root: Path) -> None:
        with pytest.raises(p.ValidationError):
            _settings(config_root, DeploymentEnvironment.Local, "grading.max_depth=0")

    def test_missing_vault_means_no_secrets(self, config_root: Path) -> None:
        secrets = Secrets(env=DeploymentEnvironment.Test, root=p.FileUrl(f"file://{config_root}"))

        assert secrets.pinata is None

    def test_vault_key_is_cached_after_first_unlock(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        vault = VaultLib(secrets=[(None, VaultSecret(b"hunter2"))])
        (tmp_path / "env.d" / "test").mkdir(parents=True)
        (tmp_path / "env.d" / "test" / "secrets.vault.yaml").write_bytes(
            vault.encrypt("pinata:\n  api_key: k3y\n  api_secret: s3cret\n")
        )
        keyring: dict[str, str] = {}
        prompts: list[str] = []

        class Keyring(object):
            @staticmethod
            def search(name: str) -> types.SimpleNamespace:
                if name not in keyring:
                    raise KeyNotExistError(name)
                return types.SimpleNamespace(data=keyring[name])

            @staticmethod
            def add(name: str, data: str) -> None:
                keyring[name] = data

        monkeypatch.setattr(source, "keyctl", Keyring)
        monkeypatch.setattr(source.getpass, "getpass", lambda prompt: prompts.append(prompt) or "hunter2")

        for _ in range(2):
            secrets = Secrets(env=DeploymentEnvironment.Test, root=p.FileUrl(tmp_path.as_uri()))

            assert secrets.pinata is not None
            assert secrets.pinata.api_key.get_secret_value() == "k3y"
        assert prompts == ["provide vault key (test:secrets.vault.yaml) "]
        assert keyring == {"test:secrets.vault.yaml": "hunter2"}

    def test_rejects_handler_with_unknown_formatter(self, config_root: Path) -> None:
        with pytest.raises(p.ValidationError, match="unknown formatter 'plain'"):
            _settings(config_root, DeploymentEnvironment.Local, "logging.handlers.console.formatter=plain")


class TestContainer(object):
    def test_provides_configured_engine(self, container: GradeworksContainer) -> None:
        builder = container.grading().builder()
        evaluator = container.grading().evaluator()

        assert isinstance(builder, GradeTreeBuilder)
        assert isinstance(evaluator, EligibilityEvaluator)
        assert builder.max_depth == evaluator.max_depth == 8
        assert container.grading().builder() is builder

    def test_boot_records_environment(self, container: GradeworksContainer, config_root: Path) -> None:
        assert container.env() is DeploymentEnvironment.Test
        assert container.debug() is True
        assert container.config.vendor.pinata.gateway_url() == "https://gateway.pinata.test/ipfs/"
        booted = container.booted()
        assert booted is not None and booted.config_root.path == str(config_root)

    def test_boot_rejects_remote_config_root(self) -> None:
        with pytest.raises(ValueError, match="unsupported scheme"):
            GradeworksContainer.boot(
                GradeworksContainer(),
                debug=False,
                env=DeploymentEnvironment.Test,
                config_root=p.AnyUrl("https://example.com/config"),  # pyright: ignore [reportArgumentType]
            )
