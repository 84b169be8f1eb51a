"""blogcms - legal page content store for the blog platform."""

__version__ = "0.1.0"
