"""
booking_ledger.peer.service

Peer transaction lifecycle (transaction + persistence owner).

Responsibilities:
- Decode and authenticate signed envelopes.
- Evaluate (simulate, discard writes) and endorse (simulate, record rw-sets).
- Commit endorsed transactions with read-version validation.
- Report commit status.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import json
from collections.abc import Mapping
from typing import TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from booking_ledger.contract.context import ClientIdentity, TransactionContext
from booking_ledger.contract.errors import ContractError
from booking_ledger.contract.runtime import Chaincode
from booking_ledger.observability.logging import get_logger
from booking_ledger.peer.db.models import ValidationCode
from booking_ledger.peer.db.repositories.state import WorldStateRepo
from booking_ledger.peer.db.repositories.transactions import TransactionRepo
from booking_ledger.peer.errors import (
    AccessDeniedError,
    BadRequestError,
    ChaincodeExecutionError,
    DuplicateTransactionError,
    NotFoundError,
)
from booking_ledger.peer.msp import MspVerifier
from booking_ledger.peer.simulator import SimulationStub
from booking_ledger.wire import (
    CommitStatusResponse,
    EndorseResponse,
    EvaluateResponse,
    ProposalPayload,
    SignedEnvelope,
    SubmitResponse,
    TransactionPayload,
    compute_tx_id,
    encode_result,
)

log = get_logger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)


class PeerService:
    """
    One instance per request. `chaincodes` maps chaincode name -> hosted chaincode,
    `channels` lists the channels this peer has joined; `commit_locks` holds one
    lock per channel, shared by all requests.
    """

    def __init__(
        self,
        *,
        session: AsyncSession,
        verifier: MspVerifier,
        channels: frozenset[str],
        chaincodes: dict[str, Chaincode],
        commit_locks: Mapping[str, asyncio.Lock],
    ) -> None:
        self._session = session
        self._verifier = verifier
        self._channels = channels
        self._chaincodes = chaincodes
        self._commit_locks = commit_locks
        self._transactions = TransactionRepo(session)

    def _open(
        self, envelope: SignedEnvelope, model: type[PayloadT]
    ) -> tuple[PayloadT, ClientIdentity]:
        try:
            payload = envelope.payload_bytes()
            signature = envelope.signature_bytes()
            decoded = model.model_validate(json.loads(payload))
        except (binascii.Error, ValueError, ValidationError) as e:
            raise BadRequestError(f"malformed envelope: {e}") from e
        identity = self._verifier.verify(payload, signature, decoded.creator)  # type: ignore[attr-defined]
        return decoded, identity

    def _check_proposal(self, proposal: ProposalPayload) -> Chaincode:
        try:
            nonce = base64.b64decode(proposal.nonce, validate=True)
        except binascii.Error as e:
            raise BadRequestError(f"malformed nonce: {e}") from e
        if compute_tx_id(nonce, proposal.creator) != proposal.tx_id:
            raise BadRequestError(f"incorrect transaction ID {proposal.tx_id}")
        if proposal.channel not in self._channels:
            raise NotFoundError(f"channel {proposal.channel} not found")
        chaincode = self._chaincodes.get(proposal.chaincode)
        if chaincode is None:
            raise NotFoundError(
                f"chaincode {proposal.chaincode} not found on channel {proposal.channel}"
            )
        return chaincode

    async def _simulate(
        self, proposal: ProposalPayload, identity: ClientIdentity
    ) -> tuple[bytes, SimulationStub]:
        chaincode = self._check_proposal(proposal)
        stub = SimulationStub(
            WorldStateRepo(self._session, channel=proposal.channel, namespace=proposal.chaincode)
        )
        ctx = TransactionContext(stub=stub, tx_id=proposal.tx_id, client_identity=identity)
        try:
            result = await chaincode.invoke(ctx, proposal.transaction_name, proposal.args)
        except (ContractError, ValueError) as e:
            log.info(
                "chaincode_error",
                tx_id=proposal.tx_id,
                transaction=proposal.transaction_name,
                error=str(e),
            )
            raise ChaincodeExecutionError(str(e)) from e
        return result, stub

    async def evaluate(self, envelope: SignedEnvelope) -> EvaluateResponse:
        proposal, identity = self._open(envelope, ProposalPayload)
        result, _ = await self._simulate(proposal, identity)
        return EvaluateResponse(tx_id=proposal.tx_id, result=encode_result(result))

    async def endorse(self, envelope: SignedEnvelope) -> EndorseResponse:
        proposal, identity = self._open(envelope, ProposalPayload)
        if await self._transactions.get(proposal.tx_id) is not None:
            raise DuplicateTransactionError(f"duplicate transaction found [{proposal.tx_id}]")

        result, stub = await self._simulate(proposal, identity)
        await self._transactions.add_endorsed(
            tx_id=proposal.tx_id,
            channel=proposal.channel,
            namespace=proposal.chaincode,
            function=proposal.transaction_name,
            args=proposal.args,
            creator_msp_id=proposal.creator.msp_id,
            creator_cert=proposal.creator.credentials,
            read_set=dict(stub.reads),
            write_set=stub.encoded_writes(),
            result=result,
        )
        await self._session.commit()
        log.info(
            "transaction_endorsed",
            tx_id=proposal.tx_id,
            transaction=proposal.transaction_name,
            writes=len(stub.writes),
        )
        return EndorseResponse(tx_id=proposal.tx_id, result=encode_result(result))

    async def _endorsed_tx(self, envelope: SignedEnvelope, kind: str):
        request, _ = self._open(envelope, TransactionPayload)
        if request.kind != kind:
            raise BadRequestError(f"expected a {kind} request, got {request.kind}")
        tx = await self._transactions.get(request.tx_id)
        if tx is None or tx.channel != request.channel:
            raise NotFoundError(f"transaction {request.tx_id} not found")
        if (tx.creator_msp_id, tx.creator_cert) != (
            request.creator.msp_id,
            request.creator.credentials,
        ):
            raise AccessDeniedError("only the endorsing creator may act on this transaction")
        return tx

    async def submit(self, envelope: SignedEnvelope) -> SubmitResponse:
        tx = await self._endorsed_tx(envelope, "submit")
        tx_id = tx.tx_id

        # Validation, block numbering and writes happen one transaction at a time per channel.
        async with self._commit_locks[tx.channel]:
            await self._session.refresh(tx)
            if tx.status != ValidationCode.endorsed:
                raise DuplicateTransactionError(f"transaction {tx_id} already submitted")

            state = WorldStateRepo(self._session, channel=tx.channel, namespace=tx.namespace)
            block_number = await self._transactions.next_block_number(tx.channel)

            stale_key = await _stale_read(state, tx.read_set)
            if stale_key is None:
                writes = {k: base64.b64decode(v) for k, v in tx.write_set.items()}
                try:
                    await state.apply(writes, version=tx_id)
                    await self._transactions.mark(
                        tx, status=ValidationCode.valid, block_number=block_number
                    )
                    await self._session.commit()
                except IntegrityError:
                    # A key outside the read set was created since endorsement.
                    await self._session.rollback()
                    await self._session.refresh(tx)
                    stale_key = next(iter(writes), "")
                else:
                    log.info("transaction_committed", tx_id=tx_id, block_number=block_number)
                    return SubmitResponse(tx_id=tx_id)

            await self._transactions.mark(
                tx, status=ValidationCode.mvcc_read_conflict, block_number=block_number
            )
            await self._session.commit()
            log.warning("transaction_invalidated", tx_id=tx_id, key=stale_key)
        return SubmitResponse(tx_id=tx_id)

    async def commit_status(self, envelope: SignedEnvelope) -> CommitStatusResponse:
        tx = await self._endorsed_tx(envelope, "commit_status")
        return CommitStatusResponse(
            tx_id=tx.tx_id, status=tx.status.value, block_number=tx.block_number
        )


async def _stale_read(state: WorldStateRepo, read_set: dict[str, str | None]) -> str | None:
    for key, version in read_set.items():
        if await state.version(key) != version:
            return key
    return None


# --- Module Notes -----------------------------------------------------------
# Submit commits synchronously, so a commit-status call after submit always sees
# the final validation code.
# Commit locks are per process; run a single peer worker per database.
