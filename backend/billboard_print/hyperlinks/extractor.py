"""
超链接提取器 - 锚点标记替换为标签并创建链接对象

职责：
1. 依次扫描文档中的每个文本单元（严格串行）
2. 将 <a href="URL">LABEL</a> 替换为 LABEL
3. 按URL查找或创建目标，在标签区间上创建链接源和链接
4. 单个链接失败只记录告警，继续处理其余标记
5. 全部单元处理完后发出一次文档级完成通知

依赖：
- IDocumentModel: 宿主内容模型（目标/链接源/链接的创建）

测试要点：
- test_replaces_all_tokens: 标记全部替换为标签，顺序不变
- test_offsets: 标签区间按当前缓冲区计算
- test_shared_url_single_destination: 同一URL只创建一个目标
- test_failure_isolated: 单个失败不中断扫描
- test_idempotent: 已处理文本再次扫描无副作用
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from ..interfaces import IDocumentModel, ITextUnit, MalformedMatchError
from ..models import LinkDestination, LinkFailure, ScanReport, TextSpan
from .delimiters import QUOTE_PAIRS, QuotePair
from .matcher import rewrite_text

logger = logging.getLogger(__name__)

Notifier = Callable[[ScanReport], None]


def _log_completion(report: ScanReport) -> None:
    logger.info(
        f"超链接处理完成: 单元 {report.units_scanned}, 标记 {report.tokens_matched}, "
        f"链接 {report.links_created}, 失败 {len(report.failures)}"
    )


class HyperlinkExtractor:
    """超链接提取器"""

    def __init__(
        self,
        document_model: IDocumentModel,
        notify: Notifier | None = None,
        pairs: tuple[QuotePair, ...] = QUOTE_PAIRS,
    ):
        self.model = document_model
        self.notify = notify or _log_completion
        self.pairs = pairs

    def process_document(self, doc: Any) -> ScanReport:
        """处理整个文档"""
        report = ScanReport()

        for unit in self.model.get_text_units(doc):
            self.process_unit(doc, unit, report)
            report.units_scanned += 1

        self.notify(report)
        return report

    def process_unit(self, doc: Any, unit: ITextUnit, report: ScanReport | None = None) -> ScanReport:
        """处理单个文本单元"""
        report = report if report is not None else ScanReport()
        expected, placements = rewrite_text(unit.content, self.pairs)

        for token, label_span in placements:
            report.tokens_matched += 1

            # label_span.start 即扣除累计偏移后的有效起点
            start = label_span.start
            unit.replace(start, start + token.match_span.length, token.label)

            try:
                self._link(doc, unit, token.url, label_span, report)
            except Exception as e:
                logger.warning(f"创建超链接失败: {token.url!r} ({token.label!r}): {e}")
                report.failures.append(
                    LinkFailure(
                        unit_index=unit.index,
                        url=token.url,
                        label=token.label,
                        reason=str(e),
                    )
                )

        if unit.content != expected:
            logger.warning(f"文本单元 {unit.index} 替换结果与预期不一致")

        return report

    def _link(
        self,
        doc: Any,
        unit: ITextUnit,
        url: str,
        span: TextSpan,
        report: ScanReport,
    ) -> None:
        if not url.strip():
            raise MalformedMatchError("URL为空")

        destination = self._get_or_create_destination(doc, url, report)
        source = self.model.create_link_source(doc, unit, span)
        self.model.create_link(doc, source, destination)
        report.links_created += 1

    def _get_or_create_destination(self, doc: Any, url: str, report: ScanReport) -> LinkDestination:
        destination = self.model.find_destination_by_name(doc, url)
        if destination is not None:
            report.destinations_reused += 1
            return destination

        destination = self.model.create_destination(doc, url)
        report.destinations_created += 1
        return destination
