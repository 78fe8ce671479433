"""Infrastructure implementations of core interfaces and adapters."""
