"""Warden: opaque bearer-token authentication service."""
