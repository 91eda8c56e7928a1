"""
Callsmith Configuration

Tool/conversation models and environment-driven settings.
"""

from .schemas import Tool, ToolApiAction, ToolApiConfig, ToolConfig, ToolHistoryMessage
from .settings import CallsmithSettings

__all__ = [
    "CallsmithSettings",
    "Tool",
    "ToolApiAction",
    "ToolApiConfig",
    "ToolConfig",
    "ToolHistoryMessage",
]
