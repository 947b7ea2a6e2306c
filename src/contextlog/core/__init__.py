"""Core domain: models, contexts, the logger, renderers and the stream printer."""
