"""Capa CLI (typer + rich)."""
