"""Domain layer: pure validation rules and typed errors. No I/O."""
