"""
打印设置模型 - 每种文档类型的用户可配置显示设置

持久化格式见 config/settings_store.py
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class DigitScript(str, Enum):
    """数字字形"""
    WESTERN = "western"
    ARABIC_INDIC = "arabic_indic"


class PrintSettings(BaseModel):
    """打印显示设置"""

    document_type: str = "operating_dues"

    # === 列显示 ===
    # key -> 是否显示；未出现的列视为显示
    visible_columns: dict[str, bool] = Field(default_factory=dict)
    hide_financials: bool = False

    # === 数字与日期 ===
    decimal_places: int = Field(2, ge=0, le=6)
    digit_script: DigitScript = DigitScript.WESTERN
    thousands_separator: bool = True
    currency_suffix: str = "د.ل"
    date_format: str = "%d/%m/%Y"

    # === 分组 ===
    payment_group_threshold: int = Field(2, ge=2)

    # === 版面 ===
    direction: str = "rtl"
    company_name: str = ""
    company_subtitle: str = ""
    company_address: str = ""
    company_phone: str = ""
    footer_text: str = "شكراً لتعاملكم معنا | Thank you for your business"
    show_footer: bool = True
    primary_color: str = "#1f2937"

    def is_column_visible(self, key: str) -> bool:
        return self.visible_columns.get(key, True)


# 默认设置（设置缺失或无效时使用）
DEFAULT_PRINT_SETTINGS = PrintSettings()


def default_settings_for(document_type: str) -> PrintSettings:
    """指定文档类型的默认设置"""
    return DEFAULT_PRINT_SETTINGS.model_copy(update={"document_type": document_type})
