"""
打印设置存储 - 每种文档类型一个YAML文件

职责：
- 读取/保存 PrintSettings（YAML）
- 读取失败时回退到默认设置（不中断打印，只记录告警）
- 部分有效的设置合并到默认值之上

使用方式：
    store = YamlSettingsStore(config.paths.settings_dir)
    settings = load_settings(store, "operating_dues")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..interfaces import ISettingsStore, SettingsUnavailableError
from ..models import PrintSettings, default_settings_for

logger = logging.getLogger(__name__)


class YamlSettingsStore(ISettingsStore):
    """基于YAML文件的设置存储"""

    def __init__(self, settings_dir: str | Path | None = None):
        if settings_dir is None:
            from .runtime_config import get_config
            settings_dir = get_config().paths.settings_dir
        self.settings_dir = Path(settings_dir)

    def path_for(self, document_type: str) -> Path:
        return self.settings_dir / f"{document_type}.yaml"

    def load(self, document_type: str) -> PrintSettings:
        """读取设置（缺失字段取默认值）"""
        path = self.path_for(document_type)
        if not path.exists():
            raise SettingsUnavailableError(f"设置文件不存在: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise SettingsUnavailableError(f"设置文件读取失败: {path}: {e}") from e

        if not isinstance(data, dict):
            raise SettingsUnavailableError(f"设置文件格式无效: {path}")

        return merge_settings(document_type, data)

    def save(self, document_type: str, settings: PrintSettings) -> None:
        """保存设置"""
        path = self.path_for(document_type)
        data = settings.model_dump(mode="json")
        data["document_type"] = document_type
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, allow_unicode=True, sort_keys=False)
        except OSError as e:
            raise SettingsUnavailableError(f"设置文件保存失败: {path}: {e}") from e


def merge_settings(document_type: str, data: dict[str, Any]) -> PrintSettings:
    """将原始设置合并到默认值之上，丢弃无效字段"""
    base = default_settings_for(document_type).model_dump()
    merged = {**base, **data, "document_type": document_type}
    try:
        return PrintSettings.model_validate(merged)
    except ValidationError as e:
        bad_keys = {str(err["loc"][0]) for err in e.errors() if err["loc"]}
        logger.warning(f"打印设置字段无效，使用默认值: {document_type}: {sorted(bad_keys)}")
        cleaned = {k: v for k, v in merged.items() if k not in bad_keys}
        return PrintSettings.model_validate(cleaned)


def load_settings(
    store: ISettingsStore | None,
    document_type: str,
    last_known: PrintSettings | None = None,
) -> PrintSettings:
    """
    读取设置，永不抛出

    失败时依次回退到 last_known、默认设置，并记录告警
    """
    if store is None:
        return last_known or default_settings_for(document_type)
    fallback = "上次设置" if last_known else "默认设置"
    try:
        return store.load(document_type)
    except SettingsUnavailableError as e:
        logger.warning(f"打印设置不可用，使用{fallback}: {e}")
    except Exception as e:
        # 第三方存储实现可能抛出任意异常
        logger.warning(f"打印设置读取异常，使用{fallback}: {type(e).__name__}: {e}")
    return last_known or default_settings_for(document_type)


def coerce_settings(settings: PrintSettings | dict[str, Any] | None, document_type: str) -> PrintSettings:
    """将调用方传入的设置规范化为 PrintSettings（缺失/无效时回退默认）"""
    if isinstance(settings, PrintSettings):
        return settings
    if isinstance(settings, dict):
        return merge_settings(document_type, settings)
    if settings is not None:
        logger.warning(f"打印设置类型无效，使用默认设置: {type(settings).__name__}")
    return default_settings_for(document_type)
