"""
booking_ledger.gateway

Client side of the ledger: identity, signing, secured connection, and the
Gateway -> Network -> Contract session used to evaluate and submit transactions.
"""

from booking_ledger.gateway.client import Contract, Gateway, GatewayTimeouts, Network
from booking_ledger.gateway.connection import PeerConnection, new_peer_connection
from booking_ledger.gateway.errors import (
    CommitError,
    CommitStatusError,
    ConnectionSetupError,
    EndorseError,
    EvaluateError,
    GatewayError,
    SubmitError,
)
from booking_ledger.gateway.identity import (
    CredentialError,
    X509Identity,
    load_certificate,
    load_private_key_sign,
    new_private_key_sign,
    new_x509_identity,
)

__all__ = [
    "CommitError",
    "CommitStatusError",
    "ConnectionSetupError",
    "Contract",
    "CredentialError",
    "EndorseError",
    "EvaluateError",
    "Gateway",
    "GatewayError",
    "GatewayTimeouts",
    "Network",
    "PeerConnection",
    "SubmitError",
    "X509Identity",
    "load_certificate",
    "load_private_key_sign",
    "new_peer_connection",
    "new_private_key_sign",
    "new_x509_identity",
]
