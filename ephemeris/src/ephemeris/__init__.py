"""Planetary positions, houses and aspects for Shefa charts."""
