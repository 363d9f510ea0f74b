"""GitHub organization pull-request, issue and adopter metrics generator."""

__version__ = "0.1.0"
