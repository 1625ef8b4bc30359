"""betterauth: user and OAuth account storage schema."""

__version__ = "0.1.0"
