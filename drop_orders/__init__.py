"""Order-reconciliation webhook for limited-quantity drops."""

__version__ = "0.1.0"
