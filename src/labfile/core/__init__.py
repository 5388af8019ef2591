"""
Core Package

Immutable models, schema validation and text helpers shared by the
builder pipeline. Nothing in here performs document I/O.
"""
