"""
Cookie Session Auth application package.
"""
