"""Build, sign and submit Otim settlement orchestrations."""

__version__ = "0.1.0"
