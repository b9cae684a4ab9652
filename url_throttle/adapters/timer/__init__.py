"""Periodic timer adapters used to re-check the throttle while input is blocked."""
