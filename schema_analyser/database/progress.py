"""Progress notification sinks for analysis runs."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)


class ProgressSink(ABC):
    """Observer notified of analysis stages.

    Notifications are fire-and-forget: ``message`` names the stage being
    loaded, ``None`` marks the end of a run.
    """

    @abstractmethod
    def notify(self, message: Optional[str]):
        pass


class NullProgressSink(ProgressSink):
    """Default sink that ignores notifications."""

    def notify(self, message: Optional[str]):
        pass


class LoggingProgressSink(ProgressSink):
    """Sink that writes stage messages to the log."""

    def notify(self, message: Optional[str]):
        if message is None:
            logger.info("Analysis finished")
        else:
            logger.info("%s", message)
