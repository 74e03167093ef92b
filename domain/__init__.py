"""
Domain types shared by the simulation core and the UI.
"""
