"""基础层测试：exceptions / config / logger / yaml_io"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from linksync.core import config as config_module
from linksync.core.config import Config, get_config, init_config
from linksync.core.exceptions import (
    ConfigError,
    DuplicateLinkError,
    LinkSyncError,
    ManifestNotFoundError,
    ManifestParseError,
    MissingDependenciesError,
    MissingFilesError,
    WorkspaceRootNotFoundError,
)
from linksync.core.link.models import LocalPackageInfo
from linksync.core.link.synchronizer import InstallSynchronizer
from linksync.utils.logger import JSONFormatter, TextFormatter, setup_logging
from linksync.utils.yaml_io import MAX_CONFIG_SIZE, load_yaml

# =========================================================================
# exceptions.py
# =========================================================================


class TestExceptions:
    @pytest.mark.parametrize(("cls", "code"), [
        (ConfigError, "CONFIG_ERROR"),
        (ManifestNotFoundError, "MANIFEST_NOT_FOUND"),
        (ManifestParseError, "MANIFEST_PARSE_ERROR"),
        (MissingDependenciesError, "MISSING_DEPENDENCIES"),
        (MissingFilesError, "MISSING_FILES"),
        (DuplicateLinkError, "DUPLICATE_LINK"),
        (WorkspaceRootNotFoundError, "WORKSPACE_ROOT_NOT_FOUND"),
    ])
    def test_hierarchy_and_codes(self, cls: type, code: str) -> None:
        assert issubclass(cls, LinkSyncError)
        assert cls.code == code

    def test_extra_attributes(self) -> None:
        assert MissingFilesError("x", package="lib").package == "lib"
        assert DuplicateLinkError("x", name="lib").name == "lib"
        assert ManifestParseError("x", path="/p").path == "/p"
        assert str(MissingDependenciesError("没有依赖")) == "没有依赖"


# =========================================================================
# config.py
# =========================================================================


class TestConfig:
    def test_default_values(self) -> None:
        cfg = Config()
        assert cfg.modules_dir == "node_modules"
        assert cfg.manifest_name == "package.json"
        assert cfg.max_workers == 8

    def test_from_file_missing_returns_default(self, tmp_path: Path) -> None:
        assert Config.from_file(str(tmp_path / "nope.yml")) == Config()

    def test_from_file_known_and_extra(self, tmp_path: Path) -> None:
        p = tmp_path / "linksync.yml"
        p.write_text("modules_dir: vendor\nmax_workers: 2\ncustom_key: 1\n", encoding="utf-8")
        cfg = Config.from_file(str(p))
        assert cfg.modules_dir == "vendor"
        assert cfg.max_workers == 2
        assert cfg.extra == {"custom_key": 1}

    @pytest.mark.parametrize("content", [
        "max_workers: 0\n",
        "max_workers: many\n",
        "max_workers: true\n",
        "modules_dir: ''\n",
        "modules_dir: 5\n",
        "manifest_name: [x]\n",
    ])
    def test_invalid_values(self, tmp_path: Path, content: str) -> None:
        p = tmp_path / "linksync.yml"
        p.write_text(content, encoding="utf-8")
        with pytest.raises(ConfigError):
            Config.from_file(str(p))

    @pytest.mark.parametrize(("content", "match"), [
        ("modules_dir: [unclosed\n", "配置文件无效"),
        ("- a\n- b\n", "顶层必须是映射"),
        ("1: x\n", "配置项名必须是字符串"),
    ])
    def test_malformed_file(self, tmp_path: Path, content: str, match: str) -> None:
        p = tmp_path / "linksync.yml"
        p.write_text(content, encoding="utf-8")
        with pytest.raises(ConfigError, match=match):
            Config.from_file(str(p))

    def test_global_singleton(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(config_module, "_current", None)
        assert get_config() is get_config()

        p = tmp_path / "linksync.yml"
        p.write_text("max_workers: 3\n", encoding="utf-8")
        cfg = init_config(str(p))
        assert get_config() is cfg
        assert cfg.max_workers == 3


# =========================================================================
# utils
# =========================================================================


class TestYamlIO:
    @pytest.mark.parametrize("content", ["", "# only a comment\n"])
    def test_empty_file(self, tmp_path: Path, content: str) -> None:
        p = tmp_path / "empty.yml"
        p.write_text(content, encoding="utf-8")
        assert load_yaml(p) == {}

    def test_directory_treated_as_missing(self, tmp_path: Path) -> None:
        assert load_yaml(tmp_path) == {}

    def test_oversized_file(self, tmp_path: Path) -> None:
        p = tmp_path / "big.yml"
        p.write_text("extra: " + "x" * (MAX_CONFIG_SIZE + 1) + "\n", encoding="utf-8")
        with pytest.raises(ValueError, match="配置文件过大"):
            load_yaml(p)


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="linksync.test", level=logging.INFO, pathname=__file__, lineno=10,
        msg="已同步: %s", args=("lib",), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLogger:
    def test_setup_replaces_handlers(self) -> None:
        setup_logging("DEBUG")
        setup_logging("WARNING")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.WARNING

    def test_unknown_level_defaults_to_info(self) -> None:
        setup_logging("verbose")
        assert logging.getLogger().level == logging.INFO

    def test_json_formatter_package_context(self) -> None:
        entry = json.loads(JSONFormatter().format(_record(package="lib", target="/app/node_modules/lib")))
        assert entry["message"] == "已同步: lib"
        assert entry["package"] == "lib"
        assert entry["target"] == "/app/node_modules/lib"
        assert "exception" not in entry

    def test_json_formatter_without_context(self) -> None:
        entry = json.loads(JSONFormatter().format(_record()))
        assert "package" not in entry
        assert "target" not in entry

    def test_text_formatter_tags_package(self) -> None:
        assert "linksync.test [lib]: 已同步: lib" in TextFormatter().format(_record(package="lib"))
        assert "linksync.test: 已同步: lib" in TextFormatter().format(_record())

    def test_synchronizer_logs_carry_package(
        self, app_dir: Path, shared_lib: Path, caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.INFO, logger="linksync.core.link.synchronizer"):
            InstallSynchronizer(app_dir).sync(
                [LocalPackageInfo(name="shared-lib", path="../shared-lib", files=("README.md",))],
            )
        synced = [r for r in caplog.records if r.getMessage().startswith("已同步")]
        assert synced and synced[0].package == "shared-lib"
        assert synced[0].target == str(app_dir / "node_modules" / "shared-lib")
