"""Storage entities and pagination primitives."""
