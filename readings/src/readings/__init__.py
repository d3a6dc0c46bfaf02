"""Narrative readings, LLM prompts and interpretation for Shefa."""
