"""Split a prize pool and its winners across ranked tiers."""
