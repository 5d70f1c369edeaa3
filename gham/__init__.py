"""gham: per-repository Git identities and access tokens."""

__version__ = "0.1.0"
