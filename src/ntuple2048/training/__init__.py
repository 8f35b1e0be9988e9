"""
Episode driver.
"""
