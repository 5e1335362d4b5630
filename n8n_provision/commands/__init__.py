"""n8n-provision CLI commands"""
