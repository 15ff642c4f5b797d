"""User-facing surfaces: Slack app, HTTP server and CLI."""
