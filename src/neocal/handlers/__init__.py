"""
View handlers, one module per view mode, each exposing a ``Handler`` class
"""
