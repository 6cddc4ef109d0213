"""Portfolio dashboard backend: holdings aggregation and periodic refresh."""
