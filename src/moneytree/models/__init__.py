"""Database models."""
from moneytree.models.user import User
from moneytree.models.category import Category
from moneytree.models.transaction import Transaction

__all__ = ["User", "Category", "Transaction"]
