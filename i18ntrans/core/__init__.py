"""Orchestration engine: walker, cache-aware scheduler, retries and assembly."""
