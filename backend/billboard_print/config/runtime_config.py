"""
运行期配置 - 读取 config/runtime.yaml

职责：
- 加载路径、渲染与日志参数
- 提供环境变量覆盖机制
- 类型安全的配置访问
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

DEFAULT_RUNTIME_PATH = Path("config/runtime.yaml")


class PathsConfig(BaseModel):
    """路径配置"""

    settings_dir: Path = Path("storage/print_settings")
    output_dir: Path = Path("storage/prints")


class RenderingConfig(BaseModel):
    """渲染配置"""

    template_name: str = "print_document.html"
    auto_open: bool = True
    auto_print: bool = True
    title_prefix: str = ""


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"
    log_to_file: bool = False
    log_file: str = "billboard_print.log"


class RuntimeConfig(BaseSettings):
    """运行期配置（支持环境变量覆盖）"""

    base_dir: Path = Path(".")

    paths: PathsConfig = Field(default_factory=PathsConfig)
    rendering: RenderingConfig = Field(default_factory=RenderingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "BBPRINT_",
        "env_nested_delimiter": "__",
        "arbitrary_types_allowed": True,
    }

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RuntimeConfig:
        """从YAML文件加载配置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        runtime_opts = data.get("runtime_options", {})

        config = cls(
            paths=PathsConfig(**cls._extract(runtime_opts, "paths")),
            rendering=RenderingConfig(**cls._extract(runtime_opts, "rendering")),
            logging=LoggingConfig(**cls._extract(runtime_opts, "logging")),
        )

        config._resolve_paths(base_dir=path.parent)
        return config

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置"""
        section = data.get(key) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result

    def _resolve_paths(self, base_dir: Path) -> None:
        """解析相对路径配置为绝对路径（基于配置文件所在目录）"""
        self.base_dir = base_dir.resolve()
        if not self.paths.settings_dir.is_absolute():
            self.paths.settings_dir = (base_dir / self.paths.settings_dir).resolve()
        if not self.paths.output_dir.is_absolute():
            self.paths.output_dir = (base_dir / self.paths.output_dir).resolve()

    def ensure_dirs(self) -> None:
        """确保必要目录存在"""
        self.paths.settings_dir.mkdir(parents=True, exist_ok=True)
        self.paths.output_dir.mkdir(parents=True, exist_ok=True)


# 全局配置实例
_config: RuntimeConfig | None = None


def get_config() -> RuntimeConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        _config = RuntimeConfig.from_yaml(DEFAULT_RUNTIME_PATH)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RuntimeConfig:
    """重新加载配置"""
    global _config
    path = yaml_path or DEFAULT_RUNTIME_PATH
    _config = RuntimeConfig.from_yaml(path)
    return _config
