"""Publish a local configuration file to S3 and report what changed."""

__version__ = "0.1.0"
