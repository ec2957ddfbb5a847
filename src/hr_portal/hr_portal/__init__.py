"""HR Portal data tooling package.

This package is organized by feature modules (store, discovery, smoke, seed, ...)
with a thin Flask controller layer over service/store layers.
"""
