"""Interactive navigator frontend.

Submodules:
    navigator   Full-screen prompt_toolkit application
    themes      ColorScheme -> prompt_toolkit Style / rich Theme
"""
