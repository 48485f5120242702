"""
Core domain models for the bookshelf service.
These are framework-agnostic and can be used across all services.
"""
from dataclasses import dataclass


@dataclass
class Book:
    """
    A stored book record.

    The identifier is not part of the record: a book is identified by the
    key it is stored under in the record store.
    """
    title: str
    author: str
