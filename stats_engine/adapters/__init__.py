"""Adaptadores de formato externo."""
