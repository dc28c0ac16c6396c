"""Built-in plugins registered by assetctl itself."""
