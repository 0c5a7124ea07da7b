"""quell - reconcile lint problems with inline disable directives."""

__version__ = "0.1.0"
