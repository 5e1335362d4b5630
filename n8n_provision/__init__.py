"""n8n-provision: single-node n8n installer behind nginx with Let's Encrypt TLS."""

__version__ = "1.0.0"
