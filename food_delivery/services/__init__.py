"""Domain services operating on an injected database session"""
