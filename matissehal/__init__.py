"""Device support utilities: location-service helpers, lights, touch power, WLAN address and build properties."""

__version__ = "0.1.0"