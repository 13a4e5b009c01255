"""
Conflict-safe dependency lock state for multi-module projects.

The lock state pins exactly one version per module and records a short
fingerprint of every module's dependents, so that two independent changes to
the same module's dependency relationships collide as a textual merge
conflict in ``versions.lock``.
"""

VERSION = "1.0.0"
__version__ = VERSION
