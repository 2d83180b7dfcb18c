# src/core/__init__.py
# Patch-resolution engine, field edit executor & editor session
