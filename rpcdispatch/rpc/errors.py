# rpcdispatch/rpc/errors.py
from __future__ import annotations

from rpcdispatch.rpc.models import RPCError

__all__ = [
    "PARSE_ERROR", "INVALID_REQUEST", "METHOD_NOT_FOUND",
    "INVALID_PARAMS", "INTERNAL_ERROR",
]


# Reserved JSON-RPC 2.0 error codes
PARSE_ERROR = RPCError(code=-32700, message="Parse error")
INVALID_REQUEST = RPCError(code=-32600, message="Invalid Request")
METHOD_NOT_FOUND = RPCError(code=-32601, message="Method not found")
INVALID_PARAMS = RPCError(code=-32602, message="Invalid params")
INTERNAL_ERROR = RPCError(code=-32603, message="Internal error")
