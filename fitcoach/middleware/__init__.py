"""HTTP middleware."""
from fitcoach.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
