"""Application layer: use cases, DTOs, ports and cache coordination."""
