"""Application layer: ports and the services that coordinate sub-flow operations."""
