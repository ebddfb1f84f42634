"""Korean vocabulary lookup backed by a generative-language API."""

from .environment import load_environment

# Credentials may live in .env files next to the project.
load_environment()

__version__ = "0.2.0"

__all__ = ["__version__", "load_environment"]
