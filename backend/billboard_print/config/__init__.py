"""
配置层 - 加载运行期配置与打印设置

职责：
- 加载 config/runtime.yaml（运行期参数）
- 读写每种文档类型的打印设置（YAML），失败时回退默认
- 初始化日志
"""

from .logging_setup import configure_logging
from .runtime_config import RuntimeConfig, get_config, reload_config
from .settings_store import YamlSettingsStore, coerce_settings, load_settings, merge_settings

__all__ = [
    "RuntimeConfig",
    "get_config",
    "reload_config",
    "configure_logging",
    "YamlSettingsStore",
    "load_settings",
    "merge_settings",
    "coerce_settings",
]
