from setuptools import setup, find_packages

setup(
    name="quill",
    version="0.1.0",
    description="Chat-driven editing for LaTeX resumes w/ OpenAI, Claude & Ollama",
    packages=find_packages(include=["src", "src.*"]),
    install_requires=[
        "typer",
        "rich",
        "python-docx",
        "pypdf",
        "openai",
        "anthropic",
        "ollama",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-socket",
        ],
    },
    entry_points={
        "console_scripts": [
            "quill=src.cli.app:app",
        ],
    },
    python_requires=">=3.11",
)
