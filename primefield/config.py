"""Global configuration for primefield."""

import os

# ---------- Default field prime ----------
# Mersenne prime M127; used by the demo and reported by the service.
DEFAULT_PRIME = 2**127 - 1

# ---------- Arithmetic service ----------
# Upper bound on modulus size accepted over HTTP (built-in int backing has
# no width of its own).
MAX_MODULUS_BITS = int(os.environ.get("PRIMEFIELD_MAX_MODULUS_BITS", "4096"))

# ---------- Client ----------
SERVICE_URL = os.environ.get("PRIMEFIELD_SERVICE_URL", "http://localhost:8000")
HTTP_TIMEOUT = float(os.environ.get("PRIMEFIELD_HTTP_TIMEOUT", "10.0"))

# ---------- Logging ----------
LOG_LEVEL = os.environ.get("PRIMEFIELD_LOG_LEVEL", "INFO")
