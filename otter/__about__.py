__version__ = "0.4.0"
__description__ = "otter : relationship-aware JSON envelopes for SQLAlchemy admin dashboards"
