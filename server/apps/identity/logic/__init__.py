"""Business logic layer for identity app.

Registration, credential checks, bearer tokens and the user
directory used by the sharing policy.
"""
