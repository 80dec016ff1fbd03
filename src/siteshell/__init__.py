"""SiteShell - navigation and layout shell for marketing sites."""

__version__ = "0.1.0"
