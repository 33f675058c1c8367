"""
Hospital management backend: patients, rooms and room allocation.
"""
