"""Pydantic schemas for every external JSON boundary."""
