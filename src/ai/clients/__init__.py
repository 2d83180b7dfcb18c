# src/ai/clients/__init__.py
# Provider clients (OpenAI, Anthropic, Ollama) & the provider factory
