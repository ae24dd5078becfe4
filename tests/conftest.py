"""测试共享 fixture: 在 tmp_path 下搭建 app + 本地包目录结构

    tmp_path/
      app/package.json          dependencies: {"shared-lib": "link:../shared-lib", ...}
      shared-lib/package.json   files: [...]
      shared-lib/dist/index.js
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from linksync.utils.logger import reset_logging


def write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def write_package(
    root: Path,
    files: dict[str, str],
    manifest: dict[str, Any] | None = None,
) -> Path:
    """写一个本地包: 源文件 + package.json（manifest 为 None 时只写 name，没有 files 字段）"""
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")
    write_json(root / "package.json", manifest if manifest is not None else {"name": root.name})
    return root


@pytest.fixture()
def app_dir(tmp_path: Path) -> Path:
    d = tmp_path / "app"
    d.mkdir()
    return d


@pytest.fixture()
def make_app(app_dir: Path) -> Callable[..., Path]:
    """写 app/package.json，返回 app 目录"""

    def _make(dependencies: dict[str, str] | None = None, **fields: Any) -> Path:
        data: dict[str, Any] = {"name": "app", **fields}
        if dependencies is not None:
            data["dependencies"] = dependencies
        write_json(app_dir / "package.json", data)
        return app_dir

    return _make


@pytest.fixture()
def shared_lib(tmp_path: Path) -> Path:
    """标准本地包: 声明 dist/index.js 和 README.md"""
    return write_package(
        tmp_path / "shared-lib",
        {
            "dist/index.js": "module.exports = 42;\n",
            "README.md": "# shared-lib\n",
            "src/index.ts": "export default 42;\n",
        },
        {"name": "shared-lib", "files": ["dist/index.js", "README.md"]},
    )


@pytest.fixture(autouse=True)
def _clean_logging():
    yield
    reset_logging()


@pytest.fixture()
def make_package() -> Callable[..., Path]:
    """本地包工厂: make_package(root, files, manifest)"""
    return write_package


@pytest.fixture()
def dump_json() -> Callable[[Path, Any], Path]:
    return write_json
