"""
EstateHub

Property listings, lead capture, and the admin API behind the EstateHub website.
"""
