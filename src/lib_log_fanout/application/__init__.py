"""Application layer: ports and use cases of the fan-out engine."""
