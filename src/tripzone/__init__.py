"""Geographic clustering and multi-day itinerary planning."""

__version__ = "0.1.0"
