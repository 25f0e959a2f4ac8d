"""
HTML打印渲染器 - PrintDocumentData → 可打印的HTML页面

职责：
1. 用 jinja2 模板生成完整HTML（抬头/客户/表格/合计/备注/页脚）
2. 写入输出目录
3. 按配置用浏览器打开（页面加载后自动调用打印）

依赖：
- jinja2: 模板渲染
"""

from __future__ import annotations

import logging
import re
import webbrowser
from datetime import datetime
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from ..config import RuntimeConfig, get_config
from ..interfaces import IPrintRenderer, RenderError
from ..models import PrintDocumentData, PrintTotalsItem
from .formatting import format_cell

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"


def _safe_filename(text: str) -> str:
    return re.sub(r"[^\w\-]+", "_", text).strip("_") or "document"


class HtmlPrintRenderer(IPrintRenderer):
    """HTML打印渲染器"""

    def __init__(
        self,
        config: RuntimeConfig | None = None,
        template_dir: Path | None = None,
        opener=webbrowser.open,
    ):
        self.config = config or get_config()
        self.opener = opener
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_html(self, data: PrintDocumentData, options: dict[str, Any] | None = None) -> str:
        """生成HTML文本"""
        options = options or {}
        settings = data.settings

        # 按本次文档的设置格式化合计，不写入共享的 Environment
        def format_total(item: PrintTotalsItem) -> str:
            if isinstance(item.value, str):
                return item.value
            return format_cell(item.value, item.kind, settings)

        title = options.get("title") or f"{self.config.rendering.title_prefix}{data.title}"
        try:
            template = self.env.get_template(self.config.rendering.template_name)
            return template.render(
                data=data,
                settings=settings,
                title=title,
                format_total=format_total,
                auto_print=options.get("auto_print", self.config.rendering.auto_print),
                generated_at=datetime.now().strftime(settings.date_format),
            )
        except TemplateError as e:
            raise RenderError(f"打印模板渲染失败: {e}") from e

    def write(self, data: PrintDocumentData, options: dict[str, Any] | None = None) -> Path:
        """生成并写入HTML文件，返回路径"""
        options = options or {}
        html = self.render_html(data, options)

        output_dir = Path(options.get("output_dir") or self.config.paths.output_dir)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        name = options.get("filename") or f"{_safe_filename(data.document_type)}_{stamp}.html"
        output_path = output_dir / name
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            output_path.write_text(html, encoding="utf-8")
        except OSError as e:
            raise RenderError(f"打印文件写入失败: {output_path}: {e}") from e
        return output_path

    def render(self, data: PrintDocumentData, options: dict[str, Any] | None = None) -> None:
        """写入HTML并打开打印视图"""
        options = options or {}
        output_path = self.write(data, options)
        logger.info(f"打印文件已生成: {output_path}")

        if options.get("open", self.config.rendering.auto_open):
            if not self.opener(output_path.resolve().as_uri()):
                raise RenderError(f"无法打开打印视图: {output_path}")
