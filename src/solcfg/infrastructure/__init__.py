"""Infrastructure layer: filesystem access and per-invocation project wiring."""
