"""Synchronization layer — remote store adapters, sync core and mutation gateway.

Submodules are imported directly (``sitesync.sync.core``,
``sitesync.sync.gateway``); this package keeps no re-exports so the
configuration module can depend on ``sitesync.sync.policy`` alone.
"""
