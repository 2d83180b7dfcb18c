# src/cli/__init__.py
# Typer command-line interface (entry point: src.cli.app:app)
