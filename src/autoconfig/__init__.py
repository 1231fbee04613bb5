"""
autoconfig - conditional activation of configuration modules

Decides at startup which optional configuration modules apply to the current
environment (importable types, properties, resources, registered components,
runtime mode) and in which order they activate.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
