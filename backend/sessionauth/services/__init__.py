"""Application services (framework-agnostic)."""
