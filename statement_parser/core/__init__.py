"""Statement parsing pipeline."""
