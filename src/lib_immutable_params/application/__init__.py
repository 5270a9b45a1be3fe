"""Application-layer contracts implemented by adapters."""
