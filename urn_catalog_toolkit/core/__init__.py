"""GUI-agnostic business logic: catalog conversion, host adapters, services."""
