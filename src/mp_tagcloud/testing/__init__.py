"""Testing – in-memory doubles for the aggregation ports."""
