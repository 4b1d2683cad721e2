"""Configuration, logging, metrics and the error taxonomy."""
