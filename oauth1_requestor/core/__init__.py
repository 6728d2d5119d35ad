"""Core infrastructure: configuration, logging, exceptions and protocols."""
