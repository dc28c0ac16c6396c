"""assetctl — static-site asset build and live-reload preview CLI."""

__version__ = "0.1.0"
