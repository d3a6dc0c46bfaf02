"""HTTP surface for Shefa charts, tree insight and tarot."""
