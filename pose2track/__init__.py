"""Head pose -> UDP tracking datagrams."""

__version__ = "0.1.0"
