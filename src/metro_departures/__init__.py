"""Plaintext next-departure lookups for Metro Transit NexTrip."""

__version__ = "0.1.0"
