"""Flask-facing infrastructure: config, extensions, logging, errors, security."""
