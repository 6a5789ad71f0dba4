import logging
import logging.config
from typing import Optional

from mood_diary.config import DiaryConfig, get_config

def setup_logger(config: Optional[DiaryConfig] = None) -> logging.Logger:
    config = config or get_config()
    if config.log_to_file:
        config.log_dir.mkdir(exist_ok=True, parents=True)
    logging.config.dictConfig(config.get_logging_config())
    logger = logging.getLogger()
    logger.info(f"Logging configured: level={config.log_level.value}, file={config.log_to_file}")
    return logger
