"""Core utilities: exceptions, error handlers, logging, transactions."""
