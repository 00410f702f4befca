"""Infrastructure layer - concrete clocks backing the timer scheduler."""
