"""
EstateHub client-side helpers: API request wrapper and display formatting.
"""
