"""Request transport adapters.

Every transport exposes the same async ``submit(url)`` contract, so the
throttle never needs to know whether a request went over HTTP or was
answered locally.
"""
