"""
Storage accessors.

Repositories hide SQL from the service layer.  Each method opens its
own connection and closes it before returning, so a repository instance
can be shared between concurrent requests.
"""

from .dream_repository import DreamRepository  # noqa: F401
