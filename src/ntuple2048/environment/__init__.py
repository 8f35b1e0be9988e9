"""
Board state, move engine and tile-placement environment.
"""
