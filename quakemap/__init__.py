"""Interactive earthquake and city map."""
