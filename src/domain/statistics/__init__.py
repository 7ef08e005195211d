"""Per-team aggregate statistics: calculator, ranking, scoring config and aggregator."""
