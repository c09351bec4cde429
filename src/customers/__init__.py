"""
Customer records: the entity and the ingestion logic that turns raw
client payloads into validated customers.
"""
from .models import Customer
from .ingestion import BatchOutcome, BatchResult, accept, ingest_batch, parse_contacts

__all__ = [
    "Customer",
    "BatchOutcome",
    "BatchResult",
    "accept",
    "ingest_batch",
    "parse_contacts",
]
