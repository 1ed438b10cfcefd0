"""CampFire Manager data layer.

Generic persistent records with declarative schemas, cached brokers,
permission-gated persistence, post-mutation hooks and injectable
collaborators.
"""

__version__ = "0.1.0"
