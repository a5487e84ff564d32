"""
Configuration Editor

Holds the crawl configuration used by the next session start.
"""

import logging
from typing import Any, Mapping

from crawl_console.models.config import CrawlConfiguration

logger = logging.getLogger(__name__)


def merge_config(
    config: CrawlConfiguration, changes: Mapping[str, Any]
) -> CrawlConfiguration:
    """
    Merge a subset of fields into `config`.

    Numeric fields are re-clamped. Raises pydantic.ValidationError for
    unknown fields or values that cannot be coerced.
    """
    return CrawlConfiguration.model_validate({**config.model_dump(), **changes})


class ConfigEditor:
    def __init__(self, config: CrawlConfiguration | None = None):
        self._config = config or CrawlConfiguration()

    @property
    def config(self) -> CrawlConfiguration:
        return self._config

    def update(self, changes: Mapping[str, Any]) -> CrawlConfiguration:
        self._config = merge_config(self._config, changes)
        logger.debug(f"Crawl configuration updated: {sorted(changes)}")
        return self._config

    def reset(self) -> CrawlConfiguration:
        self._config = CrawlConfiguration()
        logger.info("Crawl configuration reset to defaults")
        return self._config
