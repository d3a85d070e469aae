"""
Fearspike - Volatility Spike Entry Signal Engine

Retrieves daily equity index and volatility index series through a chain of
forwarding relays, detects fear-spike-then-decline events in the volatility
series and measures forward equity returns after each event.
"""

__version__ = "0.1.0"
__author__ = "Fearspike Team"
