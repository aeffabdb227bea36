"""Phase, group-average, effect-size and significance calculators."""
