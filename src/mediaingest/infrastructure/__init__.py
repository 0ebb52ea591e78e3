"""Infrastructure - cross-cutting technical concerns."""
