"""Monthly, weekday and modelled hourly aggregations."""
