"""moneytree: personal finance tracking over a permissioned category tree."""

__version__ = "0.1.0"
