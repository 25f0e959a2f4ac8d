"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(default_settings, sample_contract_rows):
        assert default_settings.decimal_places == 2
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from billboard_print.config import RuntimeConfig, YamlSettingsStore
from billboard_print.config.runtime_config import PathsConfig, RenderingConfig
from billboard_print.hyperlinks import InMemoryDocument, InMemoryDocumentModel
from billboard_print.models import DigitScript, PrintSettings
from billboard_print.printing import PrintDocumentAssembler


# ============================================================================
# 配置 Fixtures
# ============================================================================

@pytest.fixture
def runtime_config(tmp_path: Path) -> RuntimeConfig:
    """运行期配置（路径指向临时目录，不打开浏览器）"""
    return RuntimeConfig(
        paths=PathsConfig(
            settings_dir=tmp_path / "settings",
            output_dir=tmp_path / "prints",
        ),
        rendering=RenderingConfig(auto_open=False),
    )


@pytest.fixture
def settings_store(runtime_config: RuntimeConfig) -> YamlSettingsStore:
    """临时目录中的设置存储"""
    return YamlSettingsStore(runtime_config.paths.settings_dir)


@pytest.fixture
def default_settings() -> PrintSettings:
    return PrintSettings()


@pytest.fixture
def arabic_settings() -> PrintSettings:
    """阿拉伯-印度数字设置"""
    return PrintSettings(digit_script=DigitScript.ARABIC_INDIC)


# ============================================================================
# 超链接 Fixtures
# ============================================================================

@pytest.fixture
def document_model() -> InMemoryDocumentModel:
    return InMemoryDocumentModel()


@pytest.fixture
def make_document():
    """按文本单元构造独立的内存文档"""
    def _make(*stories: str) -> InMemoryDocument:
        return InMemoryDocument(stories)
    return _make


# ============================================================================
# 打印 Fixtures
# ============================================================================

@pytest.fixture
def assembler() -> PrintDocumentAssembler:
    return PrintDocumentAssembler()


@pytest.fixture
def sample_contract_rows() -> list[dict[str, Any]]:
    """示例合同行（数据库原始字段）"""
    return [
        {
            "id": "c-1",
            "contract_number": 1001,
            "customer_name": "شركة النور",
            "ad_type": "لوحة طرقية",
            "start_date": "2024-01-15",
            "feePercent": 10,
            "fullFeeAmount": 500.0,
            "collectedFeeAmount": 300.0,
            "rent_cost": 4000.0,
            "installation_cost": 600.0,
            "print_cost": 400.0,
            "total_amount": 5000.0,
            "total_paid": 3000.0,
            "collectionPercentage": 60,
        },
        {
            "id": "c-2",
            "contract_number": "1002",
            "customer_name": "مؤسسة الأفق",
            "ad_type": None,
            "start_date": "2024-03-01",
            "feePercent": 12.5,
            "fullFeeAmount": 250.0,
            "collectedFeeAmount": 250.0,
            "rent_cost": 2000.0,
            "installation_cost": 0.0,
            "print_cost": 0.0,
            "total_amount": 2000.0,
            "total_paid": 2000.0,
            "collectionPercentage": 100,
        },
    ]


@pytest.fixture
def sample_withdrawal_rows() -> list[dict[str, Any]]:
    return [
        {"id": "w-1", "amount": 100, "date": "2024-02-01", "method": "نقدي"},
        {"id": "w-2", "amount": -30, "date": "2024-02-10", "excluded": True},
    ]
