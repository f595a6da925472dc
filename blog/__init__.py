"""Blog content backend: cached post reads, invalidation on writes, engagement counters."""
