"""
Command-line interface for the CredHub client.
"""
