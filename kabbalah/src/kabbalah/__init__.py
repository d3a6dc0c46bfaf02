"""Kabbalistic correspondences, world scoring and Tree of Life analysis."""
