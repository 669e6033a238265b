"""
heapgen Backend Package.

Contains code generation backends for reconstruction scripts.
"""

from .js_emitter import JSEmitter

__all__ = ['JSEmitter']
