"""Endpoint modules for the availability feed and the Slack webhook."""
