"""Enrichment, grouping and reporting of security-posture policy results."""

__version__ = "0.1.0"