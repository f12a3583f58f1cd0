# tests/rpcdispatch/rpc/test_models.py
from __future__ import annotations

import pytest
from pydantic import ValidationError

from rpcdispatch.rpc.errors import (
    INTERNAL_ERROR, INVALID_PARAMS, INVALID_REQUEST, METHOD_NOT_FOUND, PARSE_ERROR,
)
from rpcdispatch.rpc.models import NotificationMessage, RequestMessage, ResponseMessage, RPCError


def test_standardErrors_codesAndMessages() -> None:
    assert (PARSE_ERROR.code, PARSE_ERROR.message) == (-32700, "Parse error")
    assert (INVALID_REQUEST.code, INVALID_REQUEST.message) == (-32600, "Invalid Request")
    assert (METHOD_NOT_FOUND.code, METHOD_NOT_FOUND.message) == (-32601, "Method not found")
    assert (INVALID_PARAMS.code, INVALID_PARAMS.message) == (-32602, "Invalid params")
    assert (INTERNAL_ERROR.code, INTERNAL_ERROR.message) == (-32603, "Internal error")


def test_rpcError_isFrozen_withDataCopies() -> None:
    detailed = METHOD_NOT_FOUND.withData({"method": "ghost"})

    assert detailed.data == {"method": "ghost"}
    assert METHOD_NOT_FOUND.data is None
    with pytest.raises(ValidationError):
        METHOD_NOT_FOUND.code = 1  # type: ignore[misc]


def test_rpcError_toDict_omitsNullData() -> None:
    assert RPCError(code=1, message="m").toDict() == {"code": 1, "message": "m"}
    assert RPCError(code=1, message="m", data=[1]).toDict() == {"code": 1, "message": "m", "data": [1]}


def test_requestMessage_rejectsEmptyMethod() -> None:
    with pytest.raises(ValidationError):
        RequestMessage(method="", id=1)


def test_requestMessage_rejectsScalarParams() -> None:
    with pytest.raises(ValidationError):
        RequestMessage(method="m", params="nope", id=1)  # type: ignore[arg-type]


def test_requestMessage_keepsIdType() -> None:
    assert RequestMessage(method="m", id="1").id == "1"
    assert RequestMessage(method="m", id=1).id == 1
    assert RequestMessage(method="m").id is None


def test_notificationMessage_hasNoId() -> None:
    with pytest.raises(ValidationError):
        NotificationMessage(method="m", id=1)  # type: ignore[call-arg]


def test_response_success_and_failure() -> None:
    ok = ResponseMessage.success({"a": 1}, 5)
    assert ok.indicatesSuccess()
    assert ok.toDict() == {"result": {"a": 1}, "id": 5, "jsonrpc": "2.0"}

    # A null result is still a success
    assert ResponseMessage.success(None, 5).toDict() == {"result": None, "id": 5, "jsonrpc": "2.0"}

    bad = ResponseMessage.failure(INTERNAL_ERROR, None)
    assert not bad.indicatesSuccess()
    assert bad.toDict() == {"error": {"code": -32603, "message": "Internal error"}, "id": None, "jsonrpc": "2.0"}


def test_response_failure_requiresRPCError() -> None:
    with pytest.raises(TypeError):
        ResponseMessage.failure({"code": 1, "message": "x"}, 1)  # type: ignore[arg-type]


def test_response_rejectsResultAndError() -> None:
    with pytest.raises(ValidationError):
        ResponseMessage(result=1, error=INTERNAL_ERROR, id=1)


def test_response_nonStdAttributes_appendedAfterStandard() -> None:
    response = ResponseMessage.success("xyz", 1)
    response.appendNonStdAttribute("xProcTime", "189 us")

    assert response.nonStdAttributes == {"xProcTime": "189 us"}
    assert list(response.toDict()) == ["result", "id", "jsonrpc", "xProcTime"]
    assert response.result == "xyz"


@pytest.mark.parametrize("name", ["jsonrpc", "result", "error", "id", ""])
def test_response_nonStdAttributes_cannotShadowStandard(name: str) -> None:
    response = ResponseMessage.success("xyz", 1)
    with pytest.raises(ValueError):
        response.appendNonStdAttribute(name, "x")
    assert response.toDict() == {"result": "xyz", "id": 1, "jsonrpc": "2.0"}


def test_response_nonStdAttributes_returnsCopy() -> None:
    response = ResponseMessage.success(1, 1)
    response.nonStdAttributes["sneaky"] = True
    assert response.nonStdAttributes == {}
