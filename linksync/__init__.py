"""linksync - 将 link: 协议声明的本地依赖包同步到 node_modules"""

__version__ = "0.1.0"
