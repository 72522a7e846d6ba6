"""
Search tools and utilities for Visiofinder.

This module contains path marker resolution, the recursive matcher, search
coordination and shortcut creation.
"""
