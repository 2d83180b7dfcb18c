# src/config/__init__.py
# Settings & environment configuration
