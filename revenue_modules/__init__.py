"""
Revenue Modules.

Record-level glue between the caller's service records and the pure
revenue engines.  Each module contains:
- Domain models (the nouns)
- Helpers that normalize, validate and extend records

Modules:
- service_lines: Service lines on sales orders, as-sold and as-delivered
  terms, extensions and expiry.

Actual calculation lives in revenue_engines.
"""

from revenue_modules import service_lines

__all__ = [
    "service_lines",
]
