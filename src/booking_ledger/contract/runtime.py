"""
booking_ledger.contract.runtime

Minimal chaincode runtime: transaction registration and dispatch.

Responsibilities:
- Mark contract methods as ledger transactions (`@transaction("Name")`).
- Dispatch `(function, args)` from a proposal to the right method.
- Serialize return values to the bytes handed back to clients.
"""

from __future__ import annotations

import inspect
import json
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import BaseModel

from booking_ledger.contract.context import TransactionContext
from booking_ledger.contract.errors import ArgumentError, UnknownTransactionError

TransactionFn = Callable[..., Awaitable[Any]]


def transaction(name: str):
    def decorator(fn: TransactionFn) -> TransactionFn:
        fn.__ledger_transaction__ = name  # type: ignore[attr-defined]
        return fn

    return decorator


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, list):
        return [_to_jsonable(v) for v in value]
    return value


def serialize_result(value: Any) -> bytes:
    if value is None:
        return b""
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode("utf-8")
    return json.dumps(_to_jsonable(value), separators=(",", ":")).encode("utf-8")


class Chaincode:
    """
    Hosts one contract instance and exposes its transactions by ledger name.
    """

    def __init__(self, contract: object) -> None:
        self._contract = contract
        self._transactions: dict[str, TransactionFn] = {}
        for attr in dir(type(contract)):
            fn = getattr(type(contract), attr)
            name = getattr(fn, "__ledger_transaction__", None)
            if name is not None:
                self._transactions[name] = getattr(contract, attr)

    @property
    def transaction_names(self) -> list[str]:
        return sorted(self._transactions)

    async def invoke(self, ctx: TransactionContext, function: str, args: list[str]) -> bytes:
        fn = self._transactions.get(function)
        if fn is None:
            raise UnknownTransactionError(
                f"function {function} not found in contract {type(self._contract).__name__}"
            )
        try:
            inspect.signature(fn).bind(ctx, *args)
        except TypeError as e:
            raise ArgumentError(f"invalid arguments for {function}: {e}") from e
        return serialize_result(await fn(ctx, *args))


# --- Module Notes -----------------------------------------------------------
# Transaction names are registered from method decorators at class creation;
# instances carry no per-call state.
