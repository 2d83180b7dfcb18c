# src/cli/commands/__init__.py
# Command modules registered on the root Typer app
