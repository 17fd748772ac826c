"""
Dash adapter layer: layout, selection payload parsing and callback wiring.
"""
