"""Command line interface for Learnt."""
