"""
Players and the n-tuple value function they learn.
"""
