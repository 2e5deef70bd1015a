"""kbcheck — Backstage/Kubernetes integration checklist CLI."""

__version__ = "0.1.0"
