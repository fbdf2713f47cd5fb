"""fpcli - a CLI app for Flatpak manifests."""

__version__ = "0.1.0"
