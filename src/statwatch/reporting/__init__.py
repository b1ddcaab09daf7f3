"""Human-readable rendering of watch results."""

from statwatch.reporting.console import ConsoleReporter, Reporter
from statwatch.reporting.listing import long_listing

__all__ = [
    "ConsoleReporter",
    "Reporter",
    "long_listing",
]
