from __future__ import annotations


class ConversionStoreError(Exception):
    """Base error for the conversions store (storage driver errors are not wrapped)."""


class QueryResultError(ConversionStoreError):
    """Statement returned a different number of rows than the call expects."""

    def __init__(self, statement: str, expected: str, received: int):
        self.statement = statement
        self.expected = expected
        self.received = received
        super().__init__(f"{statement}: expected {expected}, got {received} row(s)")


class StatementNotFoundError(ConversionStoreError, KeyError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"unknown SQL statement: {self.name}"


class ConversionNotFoundError(ConversionStoreError, LookupError):
    def __init__(self, source_id: int, destination_id: int):
        self.source_id = source_id
        self.destination_id = destination_id
        super().__init__("conversion_not_found")
