"""HTTP request construction from resolved actions and inferred parameters."""

from .builder import ACTION_ID_HEADER, TOOL_ID_HEADER, BuiltRequest, build_request

__all__ = ["ACTION_ID_HEADER", "TOOL_ID_HEADER", "BuiltRequest", "build_request"]
