"""Ready-to-register checks."""

from .network import dns_check, http_check, tcp_check
