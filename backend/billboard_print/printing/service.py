"""
打印服务 - 读取设置 → 组装 → 交给渲染器

设置读取/保存失败只记录告警，打印照常进行（使用上次成功读取的设置或默认设置）。
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from ..config import load_settings
from ..interfaces import IPrintRenderer, ISettingsStore, SettingsUnavailableError
from ..models import PrintDocumentData, PrintSettings
from .assembler import PrintDocumentAssembler
from .columns import DocumentType, get_document_type

logger = logging.getLogger(__name__)


class PrintService:
    """打印服务"""

    def __init__(
        self,
        renderer: IPrintRenderer,
        settings_store: ISettingsStore | None = None,
        assembler: PrintDocumentAssembler | None = None,
    ):
        self.renderer = renderer
        self.settings_store = settings_store
        self.assembler = assembler or PrintDocumentAssembler()
        self._last_known: dict[str, PrintSettings] = {}

    def get_settings(self, document_type: DocumentType | str) -> PrintSettings:
        """读取设置（永不抛出）"""
        key = get_document_type(document_type).value
        settings = load_settings(self.settings_store, key, last_known=self._last_known.get(key))
        self._last_known[key] = settings
        return settings

    def save_settings(self, document_type: DocumentType | str, settings: PrintSettings) -> bool:
        """保存设置；失败时记录告警并返回False，本次会话仍使用新设置"""
        key = get_document_type(document_type).value
        self._last_known[key] = settings
        if self.settings_store is None:
            return False
        try:
            self.settings_store.save(key, settings)
        except SettingsUnavailableError as e:
            logger.warning(f"打印设置保存失败，仅本次生效: {e}")
            return False
        return True

    def print_document(
        self,
        document_type: DocumentType | str,
        rows: Sequence[Any] | None,
        html_options: dict[str, Any] | None = None,
        **assemble_kwargs: Any,
    ) -> PrintDocumentData:
        """组装并打印，返回交给渲染器的文档"""
        settings = self.get_settings(document_type)
        data = self.assembler.assemble(document_type, rows, settings=settings, **assemble_kwargs)
        self.renderer.render(data, html_options or {})
        logger.info(f"已提交打印: {data.document_type}, {len(data.rows)} 行")
        return data
