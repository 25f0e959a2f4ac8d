"""
广告牌合同打印系统 - 后端核心模块

模块结构：
- config/      运行期配置、日志、打印设置存储
- models/      数据模型定义
- hyperlinks/  超链接提取（锚点标记→标签文本+链接对象）
- printing/    打印文档组装（列/合计/格式化/HTML渲染/Excel导出）
"""

__version__ = "0.1.0"
