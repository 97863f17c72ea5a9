"""
booking_ledger.peer

Local ledger peer.

Responsibilities:
- Host the booking chaincode against a SQL-backed world state.
- Verify signed proposals, endorse, commit, and report commit status.

This is the development/test stand-in for the ledger network the gateway
talks to; its HTTP surface is what `booking_ledger.gateway` calls.
"""

# Package marker.
