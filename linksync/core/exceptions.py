"""统一异常体系

所有业务异常继承 LinkSyncError，携带稳定的 code 便于 CLI 层输出友好提示。
文件系统错误（权限、磁盘满、源路径不存在）不包装，原样向上传播。
"""

from __future__ import annotations


class LinkSyncError(Exception):
    """框架基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(LinkSyncError):
    """配置文件内容无效"""

    code = "CONFIG_ERROR"


class ManifestNotFoundError(LinkSyncError):
    """package.json 不存在或不可读"""

    code = "MANIFEST_NOT_FOUND"

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class ManifestParseError(LinkSyncError):
    """package.json 不是合法 JSON 或字段类型不符"""

    code = "MANIFEST_PARSE_ERROR"

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class MissingDependenciesError(LinkSyncError):
    """根清单没有可扫描的 link 依赖"""

    code = "MISSING_DEPENDENCIES"


class MissingFilesError(LinkSyncError):
    """被链接的包没有声明 files 字段"""

    code = "MISSING_FILES"

    def __init__(self, message: str, package: str = "") -> None:
        super().__init__(message)
        self.package = package


class DuplicateLinkError(LinkSyncError):
    """同一个包名被多次声明为 link 依赖"""

    code = "DUPLICATE_LINK"

    def __init__(self, message: str, name: str = "") -> None:
        super().__init__(message)
        self.name = name


class WorkspaceRootNotFoundError(LinkSyncError):
    """向上查找不到工作区根目录（仅影响包管理器探测）"""

    code = "WORKSPACE_ROOT_NOT_FOUND"
