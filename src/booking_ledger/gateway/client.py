"""
booking_ledger.gateway.client

Gateway session: signed proposals, endorsement, submission and commit status.

Responsibilities:
- Bind a client identity + signer to a peer connection (`Gateway.connect`).
- Resolve channel (`Network`) and chaincode (`Contract`) handles.
- Evaluate transactions (query) and submit transactions (endorse, submit,
  wait for commit status), each stage bounded by its own timeout.
"""

from __future__ import annotations

import base64
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime

import httpx
from pydantic import BaseModel, ValidationError

from booking_ledger.gateway.connection import PeerConnection
from booking_ledger.gateway.errors import (
    CommitError,
    CommitStatusError,
    EndorseError,
    EvaluateError,
    GatewayError,
    SubmitError,
)
from booking_ledger.gateway.identity import Sign, X509Identity
from booking_ledger.observability.logging import get_logger
from booking_ledger.settings import Settings
from booking_ledger.wire import (
    CommitStatusResponse,
    EndorseResponse,
    EvaluateResponse,
    ProposalPayload,
    SignedEnvelope,
    SubmitResponse,
    TransactionPayload,
    canonical_bytes,
    compute_tx_id,
)

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class GatewayTimeouts:
    # Seconds per stage.
    evaluate: float = 5.0
    endorse: float = 15.0
    submit: float = 5.0
    commit_status: float = 60.0

    @classmethod
    def from_settings(cls, settings: Settings) -> GatewayTimeouts:
        return cls(
            evaluate=settings.evaluate_timeout,
            endorse=settings.endorse_timeout,
            submit=settings.submit_timeout,
            commit_status=settings.commit_status_timeout,
        )


def _now() -> str:
    return datetime.now(tz=UTC).isoformat()


class Gateway:
    def __init__(
        self,
        *,
        identity: X509Identity,
        sign: Sign,
        connection: PeerConnection,
        timeouts: GatewayTimeouts,
    ) -> None:
        self._identity = identity
        self._sign = sign
        self._connection = connection
        self._timeouts = timeouts

    @classmethod
    def connect(
        cls,
        identity: X509Identity,
        *,
        sign: Sign,
        connection: PeerConnection,
        timeouts: GatewayTimeouts | None = None,
    ) -> Gateway:
        if identity is None:
            raise GatewayError("identity is required")
        if sign is None:
            raise GatewayError("a signing implementation is required")
        if connection is None:
            raise GatewayError("a client connection is required")
        return cls(
            identity=identity,
            sign=sign,
            connection=connection,
            timeouts=timeouts or GatewayTimeouts(),
        )

    @property
    def identity(self) -> X509Identity:
        return self._identity

    @property
    def timeouts(self) -> GatewayTimeouts:
        return self._timeouts

    def get_network(self, name: str) -> Network:
        return Network(gateway=self, name=name)

    async def aclose(self) -> None:
        # The connection is owned by the caller and closed separately.
        log.debug("gateway_closed", msp_id=self._identity.msp_id)

    async def __aenter__(self) -> Gateway:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    def new_proposal(
        self, *, channel: str, chaincode: str, transaction_name: str, args: list[str]
    ) -> ProposalPayload:
        nonce = secrets.token_bytes(24)
        creator = self._identity.serialize()
        return ProposalPayload(
            channel=channel,
            chaincode=chaincode,
            transaction_name=transaction_name,
            args=args,
            tx_id=compute_tx_id(nonce, creator),
            nonce=base64.b64encode(nonce).decode("ascii"),
            creator=creator,
            timestamp=_now(),
        )

    def sign_payload(self, payload: BaseModel) -> SignedEnvelope:
        data = canonical_bytes(payload)
        return SignedEnvelope.wrap(data, self._sign(data))

    async def call(
        self,
        path: str,
        payload: BaseModel,
        *,
        timeout: float,
        error: type[GatewayError],
        tx_id: str,
    ) -> dict:
        envelope = self.sign_payload(payload)
        try:
            resp = await self._connection.post(path, envelope, timeout=timeout)
        except httpx.TimeoutException as e:
            raise error(f"{path} timed out after {timeout}s", tx_id=tx_id) from e
        except httpx.HTTPError as e:
            raise error(f"{path} failed: {e}", tx_id=tx_id) from e

        if resp.status_code >= 400:
            raise error(_error_detail(resp), tx_id=tx_id)
        return resp.json()


def _error_detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return str(body)


class Network:
    def __init__(self, *, gateway: Gateway, name: str) -> None:
        self._gateway = gateway
        self.name = name

    def get_contract(self, chaincode_name: str) -> Contract:
        return Contract(gateway=self._gateway, channel=self.name, chaincode=chaincode_name)


class Contract:
    def __init__(self, *, gateway: Gateway, channel: str, chaincode: str) -> None:
        self._gateway = gateway
        self.channel = channel
        self.chaincode = chaincode

    def _proposal(self, name: str, args: tuple[str, ...]) -> ProposalPayload:
        return self._gateway.new_proposal(
            channel=self.channel,
            chaincode=self.chaincode,
            transaction_name=name,
            args=[str(a) for a in args],
        )

    def _transaction(self, kind: str, tx_id: str) -> TransactionPayload:
        return TransactionPayload(
            kind=kind,
            channel=self.channel,
            tx_id=tx_id,
            creator=self._gateway.identity.serialize(),
            timestamp=_now(),
        )

    async def evaluate_transaction(self, name: str, *args: str) -> bytes:
        """
        Run a transaction on the peer without recording it; returns the result bytes.
        """

        proposal = self._proposal(name, args)
        body = await self._gateway.call(
            "/v1/evaluate",
            proposal,
            timeout=self._gateway.timeouts.evaluate,
            error=EvaluateError,
            tx_id=proposal.tx_id,
        )
        return _parse(EvaluateResponse, body, EvaluateError, proposal.tx_id).result_bytes()

    async def submit_transaction(self, name: str, *args: str) -> bytes:
        """
        Endorse, submit and wait for the commit status of a transaction.

        Returns the endorsed result once the transaction is committed as VALID;
        raises `CommitError` when it is recorded with any other validation code.
        """

        proposal = self._proposal(name, args)
        tx_id = proposal.tx_id
        timeouts = self._gateway.timeouts

        body = await self._gateway.call(
            "/v1/endorse", proposal, timeout=timeouts.endorse, error=EndorseError, tx_id=tx_id
        )
        endorsed = _parse(EndorseResponse, body, EndorseError, tx_id)

        body = await self._gateway.call(
            "/v1/submit",
            self._transaction("submit", tx_id),
            timeout=timeouts.submit,
            error=SubmitError,
            tx_id=tx_id,
        )
        _parse(SubmitResponse, body, SubmitError, tx_id)

        body = await self._gateway.call(
            "/v1/commit-status",
            self._transaction("commit_status", tx_id),
            timeout=timeouts.commit_status,
            error=CommitStatusError,
            tx_id=tx_id,
        )
        status = _parse(CommitStatusResponse, body, CommitStatusError, tx_id)
        if not status.successful:
            raise CommitError(tx_id, status.status)

        log.info(
            "transaction_committed",
            tx_id=tx_id,
            transaction=name,
            channel=self.channel,
            chaincode=self.chaincode,
            block_number=status.block_number,
        )
        return endorsed.result_bytes()


def _parse(model, body: dict, error: type[GatewayError], tx_id: str):
    try:
        return model.model_validate(body)
    except ValidationError as e:
        raise error(f"unexpected peer response: {e}", tx_id=tx_id) from e


# --- Module Notes -----------------------------------------------------------
# Evaluate never reaches the transaction log; only submit_transaction can change
# world state, and only after commit status reports VALID.
