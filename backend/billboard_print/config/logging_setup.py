"""
日志初始化 - 按 LoggingConfig 配置根logger
"""

from __future__ import annotations

import logging

from .runtime_config import RuntimeConfig, get_config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(config: RuntimeConfig | None = None) -> logging.Logger:
    """配置包级logger，返回该logger"""
    config = config or get_config()
    logger = logging.getLogger("billboard_print")
    logger.setLevel(config.logging.log_level.upper())

    # 重复调用时替换旧handler
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    logger.addHandler(stream)

    if config.logging.log_to_file:
        config.paths.output_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(
            config.paths.output_dir / config.logging.log_file, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
