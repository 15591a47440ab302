"""visualine.core — Foundation layer.

Contains the colour codec, token palette, matcher, tree scanner and report
builder. This module has NO dependencies on visualine.commands or
visualine.registry. Only stdlib and structlog are allowed here.
"""
