"""Core resolution engine for Solvent."""
