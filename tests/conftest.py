# locust relies on gevent monkey-patching, which must run before ssl/requests
# are imported by other test modules; importing locust here does it first.
try:
    import locust  # noqa: F401
except ImportError:
    pass
