"""
Application package initializer.

The application is a thin FastAPI host for per‑client question/user
stores.  Each store registers its own routes under ``/<client_name>``
when it is opened and removes them again when it is closed, so the set
of live paths changes at runtime.  The management API under
``/api/v1`` opens and closes stores by name.
"""

from .main import app  # noqa: F401
