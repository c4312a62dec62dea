"""Bookings app package.

This app encapsulates the booking lifecycle: creation against an
available item, the owner's one-time approve/reject decision, access
control on single bookings and state-filtered paginated listings for
bookers and owners. Handlers run inside a unit of work and read "now"
from an injected clock.
"""
