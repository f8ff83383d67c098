"""Core helpers: sources, materialization, default profile, views"""
