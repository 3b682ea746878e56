"""Web API package."""
