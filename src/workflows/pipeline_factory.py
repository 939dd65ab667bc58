"""
Pipeline Factory - Creates the briefing pipeline for a retrieval method.
"""
import logging

from core.errors import ConfigError
from core.profiles import ALL_PROFILES
from services.config import Config
from workflows.base import BriefingPipeline
from workflows.browser_briefing import BrowserBriefingPipeline
from workflows.remote_briefing import RemoteTaskBriefingPipeline

logger = logging.getLogger(__name__)


def create_pipeline(config: Config, source: str) -> BriefingPipeline:
    """
    Args:
        config: Loaded configuration, passed through to the pipeline
        source: "browser" or "remote"

    Raises:
        ConfigError: If the source is unknown or its credentials are missing
    """
    source = source.lower()
    if source not in ALL_PROFILES:
        raise ConfigError(f"Unknown briefing source: {source}")

    if source == "remote":
        pipeline: BriefingPipeline = RemoteTaskBriefingPipeline(config)
    else:
        pipeline = BrowserBriefingPipeline(config)

    logger.info(f"Created {pipeline.name} pipeline ({pipeline.profile.description})")
    return pipeline
