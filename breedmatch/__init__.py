"""
Breed Match API - which dog (or cat) breed do you look like?
"""
__version__ = "1.0.0"
