"""netscanner: network path, service and protocol reachability scanner."""

__version__ = "0.1.0"
