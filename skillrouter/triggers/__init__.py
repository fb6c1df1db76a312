"""Entry points that feed messages into the gateway."""
