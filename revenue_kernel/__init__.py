"""
Revenue Kernel

Shared foundation for the revenue calculation engine:
- Structured JSON logging with caller-bound context
- Typed exceptions for the layers around the engines
- Pure service-term and result value objects
- Calendar month arithmetic
"""

__version__ = "0.1.0"
