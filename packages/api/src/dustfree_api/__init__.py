"""dustfree_api — HTTP API for hosts and cleaners."""

__version__ = "0.1.0"
