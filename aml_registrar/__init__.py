"""AML Registrar.

Per-account anti-money-laundering risk policy: an external risk authority and
the accepted risk threshold for each money-laundering category.
"""

__version__ = "0.1.0"
