"""
Pixie Accounts
==============
Administrator accounts and their root folders.
"""
