# rpcdispatch/rpc/models.py
from __future__ import annotations
from typing import Any, Literal, Union
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, StrictInt, StrictFloat, StrictStr, model_validator

__all__ = [
    "JSONRPC_VERSION", "RequestId", "Params", "RPCError",
    "RequestMessage", "NotificationMessage", "ResponseMessage",
]


JSONRPC_VERSION = "2.0"

# Strict so that 1 and "1" stay distinct ids when echoed back
RequestId = Union[StrictStr, StrictInt, StrictFloat, None]
Params = list[Any] | dict[str, Any] | None

# Attribute names a non-standard attribute may never shadow
_STANDARD_ATTRIBUTES = frozenset({"jsonrpc", "result", "error", "id"})



class RPCError(BaseModel):
    """JSON-RPC 2.0 error object."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    code: int
    message: str
    data: Any = None

    def withData(self, data: Any) -> RPCError:
        return self.model_copy(update={"data": data})

    def toDict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        return out



class RequestMessage(BaseModel):
    """Decoded JSON-RPC 2.0 request: expects exactly one response."""
    model_config = ConfigDict(extra="forbid")

    method: StrictStr = Field(min_length=1)
    params: Params = None
    id: RequestId = None
    jsonrpc: Literal["2.0"] = JSONRPC_VERSION



class NotificationMessage(BaseModel):
    """Decoded JSON-RPC 2.0 notification: carries no id and never gets a reply."""
    model_config = ConfigDict(extra="forbid")

    method: StrictStr = Field(min_length=1)
    params: Params = None
    jsonrpc: Literal["2.0"] = JSONRPC_VERSION



class ResponseMessage(BaseModel):
    """
    JSON-RPC 2.0 response. Build it with `success()` or `failure()`.

    Non-standard attributes (e.g. "xProcTime") may be appended after construction;
    they are rendered after the standard members by `toDict()`.
    """
    model_config = ConfigDict(extra="forbid")

    result: Any = None
    error: RPCError | None = None
    id: RequestId = None
    jsonrpc: Literal["2.0"] = JSONRPC_VERSION

    _nonStd: dict[str, Any] = PrivateAttr(default_factory=dict)

    # --------------
    #   Validators
    # --------------
    @model_validator(mode="after")
    def _resultXorError(self):
        if self.error is not None and self.result is not None:
            raise ValueError("response must not carry both result and error")
        return self

    # ----------------
    #   Constructors
    # ----------------
    @classmethod
    def success(cls, result: Any, id: Any) -> ResponseMessage:
        return cls(result=result, id=id)

    @classmethod
    def failure(cls, error: RPCError, id: Any) -> ResponseMessage:
        if not isinstance(error, RPCError):
            raise TypeError("error must be an RPCError")
        return cls(error=error, id=id)

    # -----------
    #   Helpers
    # -----------
    def indicatesSuccess(self) -> bool:
        return self.error is None

    def appendNonStdAttribute(self, name: str, value: Any) -> None:
        if not isinstance(name, str) or not name:
            raise ValueError("non-standard attribute name must be a non-empty string")
        if name in _STANDARD_ATTRIBUTES:
            raise ValueError(f"'{name}' is a standard JSON-RPC 2.0 attribute")
        self._nonStd[name] = value

    @property
    def nonStdAttributes(self) -> dict[str, Any]:
        return dict(self._nonStd)

    def toDict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.error is not None:
            out["error"] = self.error.toDict()
        else:
            out["result"] = self.result
        out["id"] = self.id
        out["jsonrpc"] = self.jsonrpc
        out.update(self._nonStd)
        return out
