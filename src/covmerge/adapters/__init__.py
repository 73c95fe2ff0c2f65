"""Report-format adapters."""
