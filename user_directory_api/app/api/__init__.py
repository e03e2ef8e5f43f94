"""
API package containing versioned routes, shared dependencies and the
error handlers that render ``ApiError`` and framework errors as JSON.
"""
