"""
Protocol-level errors raised by the tool dispatcher.

These describe structurally invalid requests (bad arguments, unknown tool)
and are reported through the JSON-RPC error channel. Policy violations and
database failures are NOT errors at this level; they come back as
error-flagged outcomes.
"""

from __future__ import annotations

# JSON-RPC 2.0 error codes
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602


class ProtocolError(Exception):
    """Base class for errors surfaced via the transport's error mechanism."""

    code: int = INVALID_PARAMS

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidParamsError(ProtocolError):
    code = INVALID_PARAMS


class UnknownToolError(ProtocolError):
    code = METHOD_NOT_FOUND
