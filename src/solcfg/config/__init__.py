"""Configuration layer: settings, discovery, logging, and build models."""
