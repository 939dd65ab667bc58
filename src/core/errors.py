"""
Exceptions raised by the briefing pipelines.
Every one of them is terminal for the current run.
"""


class BriefingError(Exception):
    """Base class for all briefing failures."""


class ConfigError(BriefingError):
    """A required credential or setting is missing."""


class BrowserSessionError(BriefingError):
    """The local browser could not be launched or driven."""


class BrowserUseError(BriefingError):
    """The remote task API could not be reached or answered unusably."""


class TaskTimeoutError(BriefingError):
    """A remote task did not finish within the allowed wait."""

    def __init__(self, task_id: str, max_wait: float):
        super().__init__(f"Task {task_id} timed out after {max_wait:g}s")
        self.task_id = task_id
        self.max_wait = max_wait


class MalformedPayloadError(BriefingError):
    """Upstream output could not be decoded into a briefing payload."""

    def __init__(self, raw_excerpt: str, reason: str = ""):
        super().__init__(f"Could not parse briefing payload: {reason}")
        self.raw_excerpt = raw_excerpt
        self.reason = reason


class StorageError(BriefingError):
    """Reading from or writing to the briefing store failed."""
