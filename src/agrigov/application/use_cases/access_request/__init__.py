"""Access request workflow."""
