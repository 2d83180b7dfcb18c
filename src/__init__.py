# src/__init__.py
# Quill: chat-driven editing for LaTeX résumés

__version__ = "0.1.0"
