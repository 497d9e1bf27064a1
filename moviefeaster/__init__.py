"""
MovieFeaster catalog engine: in-memory movie catalog with composable filters and stable sorts.
"""
