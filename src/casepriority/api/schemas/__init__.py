"""Request and response schemas for the casepriority API."""
