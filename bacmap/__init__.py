"""bacmap: semantic matching core for BACnet point normalization and equipment mapping."""

__version__ = "0.1.0"
