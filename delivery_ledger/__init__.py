"""
delivery-ledger: routes delivery-form submissions into per-client ledger
sheets and builds the daily delivery report.
"""

__version__ = "0.1.0"
