"""Service layer helpers for BeefMusic API domains."""
