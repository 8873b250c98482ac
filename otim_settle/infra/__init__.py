from .log import get_logger
from .telemetry import EventSink, NullEventLogger, RuntimeEventLogger

__all__ = ["EventSink", "NullEventLogger", "RuntimeEventLogger", "get_logger"]
