"""Command-line interface for pkgquery."""
