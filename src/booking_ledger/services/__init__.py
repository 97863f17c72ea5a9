"""
booking_ledger.services

Service layer between the REST API and the ledger gateway.
"""

# Package marker.
