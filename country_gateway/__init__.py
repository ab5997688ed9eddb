"""Country population gateway: REST in front of a SOAP country service."""

__version__ = "0.1.0"
