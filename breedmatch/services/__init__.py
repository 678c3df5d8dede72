"""
Services: breed catalogs, name resolution, image lookup, and the LLM matcher.
"""
