"""Root pytest configuration for the backend (kept intentionally minimal).

The application package resides in the nested `app/` directory, which the
pytest configuration puts on `sys.path`. There is no `__init__` at the
backend root so it cannot shadow the real package. Environment defaults
for tests live in `tests/conftest.py`.
"""
