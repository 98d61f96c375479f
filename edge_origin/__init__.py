"""Edge origin shim: resolve edge requests against a file tree or an HTTP origin."""

__version__ = "0.1.0"
