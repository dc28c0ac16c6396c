"""Preview server — static file serving with live reload over server-sent events."""
